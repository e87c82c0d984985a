from __future__ import annotations

"""backend/app/services/files/reader.py

Read a text file and report failures through the diagnostics package.

This module provides:

- ReadStrategy: how a failure is reported before it is re-raised
- capture_context: host details worth attaching to any read failure
- FileReader: the reader itself, confined to ``Settings.files_root``

Two strategies are offered:

- SIMPLE: annotate, log the flattened chain of messages, re-raise.
- CLASSIFIED: annotate, classify, log the category's explanation
  together with the collected annotations, re-raise.

Failures are never turned into return values; callers always see the
original exception (with its traceback) after it has been logged.
"""

import enum
import getpass
import logging
import os
import platform
from pathlib import Path
from typing import Any, Dict, Optional, Union

from app.config import Settings, get_settings
from app.services.diagnostics import annotate, explain, format_messages

PathLike = Union[str, os.PathLike]


class ReadStrategy(str, enum.Enum):
    SIMPLE = "simple"
    CLASSIFIED = "classified"


def _current_directory() -> Optional[str]:
    try:
        return os.getcwd()
    except OSError:
        return None


def _user_name() -> Optional[str]:
    try:
        return getpass.getuser()
    except (OSError, KeyError):
        return None


def capture_context() -> Dict[str, Any]:
    """Host details useful when troubleshooting a failed read."""
    return {
        "Machine Name": platform.node() or None,
        "Current Directory": _current_directory(),
        "User Domain Name": os.environ.get("USERDOMAIN"),
        "User Name": _user_name(),
    }


class FileReader:
    """Read text files, logging classified diagnostics on failure."""

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._logger = logger or logging.getLogger(__name__)
        self._settings = settings or get_settings()

    def read(self, path: Optional[PathLike], strategy: ReadStrategy = ReadStrategy.SIMPLE) -> str:
        if ReadStrategy(strategy) is ReadStrategy.CLASSIFIED:
            return self.read_classified(path)
        return self.read_simple(path)

    def read_simple(self, path: Optional[PathLike]) -> str:
        try:
            return self._read_text(path)
        except Exception as exc:
            self._annotate(exc, path)
            messages = format_messages(
                exc, self._settings.line_delimiter, self._settings.field_delimiter
            )
            self._logger.error(
                "Error reading file [%s]. Messages: [%s]", path, messages, exc_info=exc
            )
            raise

    def read_classified(self, path: Optional[PathLike]) -> str:
        try:
            return self._read_text(path)
        except Exception as exc:
            self._annotate(exc, path)
            explanation = explain(
                exc,
                file_name=None if path is None else str(path),
                line_delimiter=self._settings.line_delimiter,
                field_delimiter=self._settings.field_delimiter,
            )
            self._logger.error(
                "%s Data: [%s]", explanation.text, explanation.data, exc_info=exc
            )
            raise

    def _read_text(self, path: Optional[PathLike]) -> str:
        if path is None or not str(path).strip():
            raise ValueError("The fully qualified file name is empty.")

        # Relative paths are taken from files_root; anything resolving outside it is refused.
        root = Path(self._settings.files_root).expanduser().resolve()
        target = (root / Path(path).expanduser()).resolve()
        if not target.is_relative_to(root):
            raise PermissionError(f"{path} is outside {root}.")

        if not target.exists():
            # A missing file is reported as a failure, not as an empty result.
            raise FileNotFoundError(f"{path} does not exist.")

        if target.is_file():
            size = target.stat().st_size
            if size > self._settings.max_file_bytes:
                raise ValueError(
                    f"{path} is {size} bytes; the limit is {self._settings.max_file_bytes}."
                )
        return target.read_text(encoding="utf-8")

    def _annotate(self, exc: BaseException, path: Optional[PathLike]) -> None:
        annotate(exc, "Fully Qualified File Name", None if path is None else str(path))
        if not self._settings.capture_environment:
            return
        for key, value in capture_context().items():
            annotate(exc, key, value)
