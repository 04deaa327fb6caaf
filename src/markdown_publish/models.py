"""Pydantic models for API responses."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class DocumentStatusResponse(BaseModel):
    name: str
    status: Literal["published", "deleted"]


class DocumentListResponse(BaseModel):
    documents: list[str] = Field(default_factory=list)
    total: int = 0


class ErrorResponse(BaseModel):
    detail: str
