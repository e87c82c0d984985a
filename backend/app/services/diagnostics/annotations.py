from __future__ import annotations

"""backend/app/services/diagnostics/annotations.py

Attach diagnostic key/value pairs to a failure as it propagates.

Every layer that catches a failure may add context (file name, machine
name, working directory, ...) before re-raising it. Keys are never
overwritten: a second value for ``"X"`` lands under ``"X-1"``, a third
under ``"X-2"`` and so on, up to ``MAX_KEY_SUFFIX`` probes.

The store is owned by one failure at a time. ``annotate`` does a
check-then-write, so two threads must not annotate the same failure
without external locking.
"""

import logging
from collections.abc import MutableMapping
from typing import Any

logger = logging.getLogger(__name__)

DIAGNOSTIC_DATA_ATTR = "diagnostic_data"
MAX_KEY_SUFFIX = 100
NULL = "NULL"


def annotations_of(target: Any) -> MutableMapping[str, Any]:
    """Return the annotation store of ``target``.

    - exceptions keep their store in a ``diagnostic_data`` dict, created
      on first access
    - mappings are their own store
    - anything exposing an ``annotations`` mapping (``Failure``) uses it
    """
    if target is None:
        return {}
    if isinstance(target, BaseException):
        data = getattr(target, DIAGNOSTIC_DATA_ATTR, None)
        if data is None:
            data = {}
            setattr(target, DIAGNOSTIC_DATA_ATTR, data)
        return data
    if isinstance(target, MutableMapping):
        return target
    data = getattr(target, "annotations", None)
    if isinstance(data, MutableMapping):
        return data
    raise TypeError(f"{type(target).__name__} has no annotation store")


def _free_key(store: MutableMapping[str, Any], key: str) -> str | None:
    if key not in store:
        return key
    for i in range(1, MAX_KEY_SUFFIX + 1):
        candidate = f"{key}-{i}"
        if candidate not in store:
            return candidate
    return None


def annotate(target: Any, key: str, value: Any) -> str | None:
    """Add ``key=value`` to the failure's annotations without overwriting.

    Returns the key actually used, or ``None`` when nothing was stored
    (no target, every suffixed key taken, or an unusable target). Never
    raises: enrichment must not become a failure of its own.
    """
    if target is None:
        return None

    try:
        store = annotations_of(target)
        used = _free_key(store, str(key))
        if used is None:
            logger.warning(
                "Annotation %r dropped: %d suffixed keys already in use",
                key,
                MAX_KEY_SUFFIX,
            )
            return None
        store[used] = NULL if value is None else value
        return used
    except Exception as exc:  # noqa: BLE001
        logger.warning("Annotation %r could not be stored: %s", key, exc)
        return None
