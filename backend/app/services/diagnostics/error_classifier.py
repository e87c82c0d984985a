from __future__ import annotations

"""backend/app/services/diagnostics/error_classifier.py

Centralized failure classification for file reads.

This module maps a failure (a live exception or a ``Failure`` chain) to a
stable ``Category`` and turns that category into an audience-facing
explanation.

The classification is:
- deterministic (one ordered table, first match wins)
- structural (exception families, not message text)
- total (anything unmatched is ``Category.UNKNOWN``)

Category values:
- InvalidInput
- PathOrIOProblem
- NotFound
- Unsupported
- AccessDenied
- Unknown
"""

import builtins
import enum
import io
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Type

from app.services.diagnostics.annotations import NULL
from app.services.diagnostics.chain import Failure, as_failure, kind_of
from app.services.diagnostics.formatter import collect_data, format_messages


class Category(str, enum.Enum):
    INVALID_INPUT = "InvalidInput"
    PATH_OR_IO_PROBLEM = "PathOrIOProblem"
    NOT_FOUND = "NotFound"
    UNSUPPORTED = "Unsupported"
    ACCESS_DENIED = "AccessDenied"
    UNKNOWN = "Unknown"


# Order matters: FileNotFoundError and PermissionError are OSErrors, and
# io.UnsupportedOperation / UnicodeError are also ValueErrors.
CLASSIFICATION_TABLE: Tuple[Tuple[Tuple[Type[BaseException], ...], Category], ...] = (
    ((FileNotFoundError,), Category.NOT_FOUND),
    ((PermissionError,), Category.ACCESS_DENIED),
    ((NotImplementedError, io.UnsupportedOperation, UnicodeError), Category.UNSUPPORTED),
    ((ValueError, TypeError), Category.INVALID_INPUT),
    ((OSError,), Category.PATH_OR_IO_PROBLEM),
)

EXPLANATIONS: dict[Category, str] = {
    Category.INVALID_INPUT: "The value used for the fully qualified file name was incorrect. [{messages}]",
    Category.PATH_OR_IO_PROBLEM: "The fully qualified file name was not usable or could not be reached. [{messages}]",
    Category.NOT_FOUND: "The file matching the fully qualified file name could not be found. [{messages}]",
    Category.UNSUPPORTED: "Accessing this file is not supported. [{messages}]",
    Category.ACCESS_DENIED: "The user does not have access rights to read [{file_name}]. [{messages}]",
    Category.UNKNOWN: (
        "An unanticipated exception [{kind}] occurred. "
        "Please check the exception messages for more information. [{messages}]"
    ),
}


@dataclass
class Explanation:
    """Everything a caller needs to log or report one failure."""

    category: Category
    text: str
    messages: str
    data: str
    kind: str


def _classify_type(exc_type: type) -> Category:
    for family, category in CLASSIFICATION_TABLE:
        if issubclass(exc_type, family):
            return category
    return Category.UNKNOWN


def _resolve_kind(kind: Any) -> Optional[type]:
    """Map a kind name back to an exception type known to the table."""
    if not isinstance(kind, str):
        return None
    for family, _ in CLASSIFICATION_TABLE:
        for exc_type in family:
            if kind in (exc_type.__name__, kind_of(exc_type)):
                return exc_type
    candidate = getattr(builtins, kind.removeprefix("builtins."), None)
    if isinstance(candidate, type) and issubclass(candidate, BaseException):
        return candidate
    return None


def classify(failure: Any) -> Category:
    """Classify the outermost level of ``failure``.

    Never raises; an unrecognised (or missing) failure is ``UNKNOWN``.
    """
    if isinstance(failure, BaseException):
        return _classify_type(type(failure))
    if isinstance(failure, Failure):
        # The kind itself first, then its ancestors for snapshotted subclasses.
        for kind in (failure.kind, *failure.family):
            exc_type = _resolve_kind(kind)
            if exc_type is not None:
                return _classify_type(exc_type)
    return Category.UNKNOWN


def explain_for(
    category: Category | str,
    messages: str,
    *,
    kind: Optional[str] = None,
    file_name: Optional[str] = None,
) -> str:
    """Render the fixed explanation for ``category``.

    ``kind`` is reported by the Unknown template, ``file_name`` by the
    AccessDenied one. An unrecognised category falls back to Unknown.
    """
    try:
        category = Category(category)
    except ValueError:
        category = Category.UNKNOWN
    return EXPLANATIONS[category].format(
        messages=messages,
        kind=kind or NULL,
        file_name=file_name or NULL,
    )


def explain(
    failure: Any,
    *,
    file_name: Optional[str] = None,
    line_delimiter: Optional[str] = None,
    field_delimiter: Optional[str] = None,
) -> Explanation:
    """Classify, format and explain ``failure`` in one pass."""
    category = classify(failure)
    chain = as_failure(failure)
    messages = format_messages(chain, line_delimiter, field_delimiter)
    data = collect_data(chain)
    kind = chain.base.short_kind if chain is not None else NULL
    return Explanation(
        category=category,
        text=explain_for(category, messages, kind=kind, file_name=file_name),
        messages=messages,
        data=data,
        kind=kind,
    )
