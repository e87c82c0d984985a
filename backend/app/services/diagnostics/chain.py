from __future__ import annotations

"""backend/app/services/diagnostics/chain.py

Failure chain model.

A ``Failure`` is one level of a cause-linked chain, outermost first. Chains
are either built directly (tests, the explain endpoint) or derived from a
live exception with ``Failure.from_exception``, which follows Python's own
chaining rules (``raise ... from ...`` first, then implicit context).

Traversal is always bounded: it stops at a node already visited and after
``MAX_CHAIN_DEPTH`` levels.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple

from app.services.diagnostics.annotations import DIAGNOSTIC_DATA_ATTR

MAX_CHAIN_DEPTH = 64


@dataclass
class Failure:
    """One level of a failure chain."""

    kind: str
    message: Optional[str] = None
    origin: Optional[str] = None
    annotations: Dict[str, Any] = field(default_factory=dict)
    cause: Optional["Failure"] = None
    # Kinds of the type and its ancestors, most specific first.
    family: Tuple[str, ...] = ()

    @property
    def short_kind(self) -> str:
        """Bare type name, without module or enclosing class."""
        return str(self.kind).rsplit(".", 1)[-1]

    @property
    def base(self) -> "Failure":
        """Innermost failure of the chain."""
        node = self
        for node in self.iter_chain():
            pass
        return node

    def iter_chain(self) -> Iterator["Failure"]:
        seen: set[int] = set()
        node: Optional[Failure] = self
        while node is not None and id(node) not in seen and len(seen) < MAX_CHAIN_DEPTH:
            seen.add(id(node))
            yield node
            node = node.cause

    @classmethod
    def from_exception(cls, exc: BaseException) -> "Failure":
        """Snapshot ``exc`` and its causes into a Failure chain."""
        levels = [
            cls(
                kind=kind_of(type(item)),
                message=_message_of(item),
                origin=_origin_of(item),
                annotations=dict(getattr(item, DIAGNOSTIC_DATA_ATTR, None) or {}),
                family=tuple(kind_of(t) for t in type(item).__mro__),
            )
            for item in iter_exceptions(exc)
        ]
        for outer, inner in zip(levels, levels[1:]):
            outer.cause = inner
        return levels[0]


def kind_of(exc_type: type) -> str:
    module = getattr(exc_type, "__module__", None)
    if module in (None, "builtins"):
        return exc_type.__qualname__
    return f"{module}.{exc_type.__qualname__}"


def _message_of(exc: BaseException) -> Optional[str]:
    if not exc.args:
        return None
    return str(exc) or None


def _origin_of(exc: BaseException) -> Optional[str]:
    origin = getattr(exc, "origin", None)
    if origin:
        return str(origin)
    tb = exc.__traceback__
    if tb is None:
        return None
    while tb.tb_next is not None:
        tb = tb.tb_next
    return tb.tb_frame.f_globals.get("__name__")


def next_exception(exc: BaseException) -> Optional[BaseException]:
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__


def iter_exceptions(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen and len(seen) < MAX_CHAIN_DEPTH:
        seen.add(id(current))
        yield current
        current = next_exception(current)


def as_failure(root: Any) -> Optional[Failure]:
    """Accept a Failure, an exception or None and return a Failure (or None)."""
    if root is None or isinstance(root, Failure):
        return root
    if isinstance(root, BaseException):
        return Failure.from_exception(root)
    raise TypeError(f"Cannot build a failure chain from {type(root).__name__}")


def iter_chain(root: Any) -> Iterator[Failure]:
    failure = as_failure(root)
    if failure is None:
        return iter(())
    return failure.iter_chain()


def describe_root(root: Any) -> str:
    """Name of what was being examined, used when a diagnostic itself fails."""
    if root is None:
        return "NULL"
    if isinstance(root, Failure):
        return root.kind
    return type(root).__name__
