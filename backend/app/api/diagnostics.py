# backend/app/api/diagnostics.py
from __future__ import annotations

"""
Diagnostic routes.

Exposes the failure classifier for chains described by clients, without
touching the filesystem.
"""

from fastapi import APIRouter, Depends

from app import schemas
from app.config import Settings, get_settings
from app.services.diagnostics import explain

router = APIRouter(prefix="/diagnostics", tags=["diagnostics"])


@router.post("/explain", response_model=schemas.FailureReport)
def explain_failure(
    payload: schemas.ExplainRequest,
    settings: Settings = Depends(get_settings),
) -> schemas.FailureReport:
    """
    Classify a failure chain reported by a client.

    No I/O is performed: the chain is rebuilt from the payload and run
    through the same formatter and classifier the file reader uses.
    """
    explanation = explain(
        payload.to_failure(),
        file_name=payload.file_name,
        line_delimiter=settings.line_delimiter,
        field_delimiter=settings.field_delimiter,
    )
    return schemas.FailureReport(
        category=explanation.category,
        explanation=explanation.text,
        messages=explanation.messages,
        data=explanation.data,
    )
