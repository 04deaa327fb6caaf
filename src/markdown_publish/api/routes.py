"""API routes: upload, delete, list and public fetch of rendered documents."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from starlette.concurrency import run_in_threadpool

from ..errors import PayloadTooLarge, PublishError, StorageReadFailure
from ..models import DocumentListResponse, DocumentStatusResponse
from ..security import require_api_key
from ..services.publisher import Publisher
from ..services.renderer import NOT_FOUND_PLACEHOLDER, render_listing, wrap_html_document
from ..services.validator import ensure_valid_name

logger = logging.getLogger(__name__)

router = APIRouter(tags=["publish"])


def _publisher(request: Request) -> Publisher:
    return request.app.state.publisher


async def _read_capped_body(request: Request, limit: int) -> bytes:
    """Read the request body, stopping as soon as it exceeds `limit` bytes."""
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise PayloadTooLarge(f"Content-Length {declared} exceeds limit of {limit}")
    chunks: list[bytes] = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > limit:
            raise PayloadTooLarge(f"Body exceeds limit of {limit}")
        chunks.append(chunk)
    return b"".join(chunks)


def _unprocessable(op: str, name: str, e: Exception) -> HTTPException:
    # Every upload/delete failure is a 422 on the wire; the cause only goes to the log.
    if isinstance(e, PublishError):
        logger.warning("%s %r failed: %s: %s", op, name, type(e).__name__, e.message)
        return HTTPException(422, e.message)
    logger.exception("%s %r failed unexpectedly", op, name)
    return HTTPException(422, "Unprocessable")


@router.post(
    "/upload/{name:path}",
    response_model=DocumentStatusResponse,
    dependencies=[Depends(require_api_key)],
)
async def upload(name: str, request: Request):
    """Store the raw body as the document's markdown source and render it."""
    try:
        ensure_valid_name(name)
        body = await _read_capped_body(request, request.app.state.settings.max_upload_bytes)
        await run_in_threadpool(_publisher(request).publish, name, body)
    except Exception as e:
        raise _unprocessable("Upload", name, e)
    return DocumentStatusResponse(name=name, status="published")


@router.get(
    "/delete/{name:path}",
    response_model=DocumentStatusResponse,
    dependencies=[Depends(require_api_key)],
)
async def delete(name: str, request: Request):
    try:
        ensure_valid_name(name)
        await run_in_threadpool(_publisher(request).unpublish, name)
    except Exception as e:
        raise _unprocessable("Delete", name, e)
    return DocumentStatusResponse(name=name, status="deleted")


@router.get("/upload_list", dependencies=[Depends(require_api_key)])
async def upload_list(request: Request):
    """List published names. HTML by default, JSON when the client asks for it."""
    try:
        names = await run_in_threadpool(_publisher(request).list_names)
    except PublishError:
        raise
    except Exception as e:
        logger.exception("Listing documents failed")
        raise StorageReadFailure(str(e)) from e
    if "application/json" in request.headers.get("accept", ""):
        return DocumentListResponse(documents=names, total=len(names))
    return HTMLResponse(render_listing(names))


@router.get("/publish/{name:path}", response_class=HTMLResponse)
async def publish(name: str, request: Request):
    """Public: serve the rendered document, or a placeholder when it is unavailable."""
    try:
        body = await run_in_threadpool(_publisher(request).fetch_rendered, name)
    except PublishError as e:
        logger.info("Fetch %r unavailable: %s", name, type(e).__name__)
        return HTMLResponse(NOT_FOUND_PLACEHOLDER)
    except Exception:
        logger.exception("Fetch %r failed unexpectedly", name)
        return HTMLResponse(NOT_FOUND_PLACEHOLDER)
    return HTMLResponse(wrap_html_document(body))
