"""FastAPI application entry - Markdown publish server."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.routes import router
from .config import Settings, load_settings
from .errors import PublishError
from .models import ErrorResponse
from .services.document_store import DocumentStore
from .services.publisher import Publisher

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def create_app(settings: Settings) -> FastAPI:
    """Build the app around one read-only Settings instance."""
    app = FastAPI(
        title="Markdown Publish",
        description="Publish markdown documents as HTML pages",
        version="0.1.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    store = DocumentStore(settings.source_dir, settings.rendered_dir, settings.max_upload_bytes)
    store.setup()
    app.state.settings = settings
    app.state.publisher = Publisher(store)

    @app.exception_handler(PublishError)
    async def _publish_error_handler(request: Request, exc: PublishError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=ErrorResponse(detail=exc.message).model_dump())

    app.include_router(router)

    @app.get("/")
    async def root():
        return {"service": "markdown-publish", "docs": "/docs"}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


def main() -> None:
    import uvicorn

    settings = load_settings()
    configure_logging(settings.log_level)
    logger.info("Serving %s on %s:%d", settings.data_dir, settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
