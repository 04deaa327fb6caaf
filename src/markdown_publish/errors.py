"""Publish errors: every failure the service can map to a client-facing status."""

from __future__ import annotations


class PublishError(Exception):
    """Base error. `status_code` is what the client sees on the wire."""

    status_code = 422
    detail = "Unprocessable"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.detail)
        self.message = message or self.detail


class AuthMissing(PublishError):
    status_code = 400
    detail = "Missing API key"


class AuthInvalid(PublishError):
    status_code = 400
    detail = "Invalid API key"


class InvalidName(PublishError):
    detail = "Invalid document name"


class DocumentNotFound(PublishError):
    detail = "Document not found"


class PayloadTooLarge(PublishError):
    detail = "Payload too large"


class StorageWriteFailure(PublishError):
    detail = "Storage write failed"


class RenderFailure(PublishError):
    detail = "Render failed"


class StorageReadFailure(PublishError):
    status_code = 500
    detail = "Storage read failed"
