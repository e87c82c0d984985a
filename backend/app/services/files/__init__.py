from __future__ import annotations

"""
File access service package.

This package provides:
- FileReader: reads text files and reports failures with classified
  diagnostics before re-raising them
- ReadStrategy: selects how a failed read is reported
"""

from .reader import FileReader, ReadStrategy, capture_context  # noqa: F401
