from __future__ import annotations

"""
Diagnostics and error classification utilities.

This package provides:
- chain: the Failure model and bounded traversal of exception causes
- annotations: collision-free key/value context attached to failures
- formatter: flatten a chain into message text and annotation text
- error_classifier: map failures to a stable Category and explanation

The goal is to keep error handling logic centralized and deterministic.
"""

from .annotations import annotate, annotations_of  # noqa: F401
from .chain import Failure  # noqa: F401
from .error_classifier import (  # noqa: F401
    Category,
    Explanation,
    classify,
    explain,
    explain_for,
)
from .formatter import collect_data, format_messages  # noqa: F401
