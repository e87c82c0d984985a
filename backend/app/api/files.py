# backend/app/api/files.py
from __future__ import annotations

"""
File read routes.

This module depends on:
- app.services.files.FileReader for the read itself
- app.services.diagnostics.explain for the failure report

Paths are confined to Settings.files_root; a refused path is reported
as AccessDenied (403).
"""

from fastapi import APIRouter, Depends, HTTPException

from app import schemas
from app.config import Settings, get_settings
from app.services.diagnostics import Category, explain
from app.services.files import FileReader

router = APIRouter(prefix="/files", tags=["files"])

STATUS_BY_CATEGORY: dict[Category, int] = {
    Category.INVALID_INPUT: 400,
    Category.ACCESS_DENIED: 403,
    Category.NOT_FOUND: 404,
    Category.UNSUPPORTED: 415,
    Category.PATH_OR_IO_PROBLEM: 422,
    Category.UNKNOWN: 500,
}


@router.post("/read", response_model=schemas.FileContents)
def read_file(
    payload: schemas.ReadFileRequest,
    settings: Settings = Depends(get_settings),
) -> schemas.FileContents:
    """
    Read a text file from the backend's filesystem.

    A failed read has already been logged by the reader; the response
    carries the same classified explanation so the client sees why.
    """
    reader = FileReader(settings=settings)
    try:
        content = reader.read(payload.path, payload.strategy)
    except Exception as exc:  # noqa: BLE001
        explanation = explain(
            exc,
            file_name=payload.path,
            line_delimiter=settings.line_delimiter,
            field_delimiter=settings.field_delimiter,
        )
        report = schemas.FailureReport(
            category=explanation.category,
            explanation=explanation.text,
            messages=explanation.messages,
            data=explanation.data,
        )
        raise HTTPException(
            status_code=STATUS_BY_CATEGORY[explanation.category],
            detail=report.model_dump(mode="json"),
        ) from exc

    return schemas.FileContents(path=payload.path, content=content, length=len(content))
