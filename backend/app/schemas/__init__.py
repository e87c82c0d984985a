# backend/app/schemas/__init__.py
from __future__ import annotations

"""
Pydantic schemas for request/response models.

This module is the API contract layer and depends on:
- app.services.diagnostics.Category
- app.services.files.ReadStrategy

It is used by the API routes in app.api.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.services.diagnostics import Category, Failure
from app.services.files import ReadStrategy


# ---------- File Schemas ----------


class ReadFileRequest(BaseModel):
    path: str
    strategy: ReadStrategy = ReadStrategy.CLASSIFIED


class FileContents(BaseModel):
    path: str
    content: str
    length: int


# ---------- Diagnostic Schemas ----------


class FailureLevel(BaseModel):
    """One level of a failure chain supplied by a client."""

    kind: str
    message: Optional[str] = None
    origin: Optional[str] = None
    annotations: Dict[str, Any] = Field(default_factory=dict)


class ExplainRequest(FailureLevel):
    """
    A failure chain to classify without performing any I/O.

    The request itself is the outermost level; ``causes`` lists the
    inner levels, outermost first.
    """

    causes: List[FailureLevel] = Field(default_factory=list, max_length=64)
    file_name: Optional[str] = None

    def to_failure(self) -> Failure:
        levels = [self, *self.causes]
        chain: Failure | None = None
        for level in reversed(levels):
            chain = Failure(
                kind=level.kind,
                message=level.message,
                origin=level.origin,
                annotations=dict(level.annotations),
                cause=chain,
            )
        return chain


class FailureReport(BaseModel):
    category: Category
    explanation: str
    messages: str
    data: str
