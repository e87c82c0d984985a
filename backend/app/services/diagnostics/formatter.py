from __future__ import annotations

"""backend/app/services/diagnostics/formatter.py

Flatten a failure chain into diagnostic text.

- format_messages: one ``<kind>=[<message>]`` block per level, joined by a
  line delimiter. The deepest level usually holds the real reason, so
  every level is kept. A missing or empty message renders as ``NULL``.
- collect_data: one ``<kind> Data=[...]`` block per level with the
  annotations attached at that level, joined by ``::``.

Both are pure. If either fails internally, the internal exception is
annotated with what was being examined and re-raised.
"""

import os
from typing import Any, Optional

from app.services.diagnostics.annotations import NULL, annotate
from app.services.diagnostics.chain import describe_root, iter_chain

DEFAULT_FIELD_DELIMITER = ";"
DATA_LEVEL_DELIMITER = "::"
DATA_PAIR_DELIMITER = "|"


def _or_null(value: Any) -> str:
    return NULL if value is None else str(value)


def format_messages(
    root: Any,
    line_delimiter: Optional[str] = None,
    field_delimiter: Optional[str] = None,
) -> str:
    """Return every message in the chain, outermost first.

    ``line_delimiter`` separates levels (``os.linesep`` when empty).
    ``field_delimiter`` separates fields within a level (``;`` when empty);
    a space, ``=``, ``[`` or ``]`` would make the output ambiguous.
    """
    line_delimiter = line_delimiter or os.linesep
    field_delimiter = field_delimiter or DEFAULT_FIELD_DELIMITER

    try:
        blocks: list[str] = []
        for node in iter_chain(root):
            block = f"{node.kind}=[{node.message or NULL}]"
            if node.origin and node.origin.strip():
                block += f"{field_delimiter} Source=[{node.origin}]"
            blocks.append(block)

        result = line_delimiter.join(blocks).strip()
        if result.endswith(line_delimiter):
            result = result[: -len(line_delimiter)]
    except Exception as exc:
        annotate(exc, "root", describe_root(root))
        raise

    return result


def collect_data(root: Any) -> str:
    """Return the annotations of every level in the chain, outermost first."""
    try:
        blocks: list[str] = []
        for node in iter_chain(root):
            pairs = DATA_PAIR_DELIMITER.join(
                f"{{{key}}}={{{_or_null(value)}}}" for key, value in node.annotations.items()
            )
            blocks.append(f"{node.short_kind} Data=[{pairs or 'None'}]")

        result = DATA_LEVEL_DELIMITER.join(blocks).strip()
        if result.endswith(DATA_LEVEL_DELIMITER):
            result = result[: -len(DATA_LEVEL_DELIMITER)]
    except Exception as exc:
        annotate(exc, "root", describe_root(root))
        raise

    return result
