# tests/conftest.py
"""
Shared pytest fixtures for the diagnostics and file reader tests.

Provides:
- chain builders for programmatic Failure chains and live exception chains
- Settings instances that do not read the environment and serve tmp_path
- a FastAPI TestClient wired to those settings
"""
from __future__ import annotations

from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.services.diagnostics import Failure


def _build_chain(*levels: tuple[str, Optional[str]]) -> Failure:
    chain: Optional[Failure] = None
    for kind, message in reversed(levels):
        chain = Failure(kind=kind, message=message, cause=chain)
    assert chain is not None
    return chain


@pytest.fixture
def build_chain() -> Callable[..., Failure]:
    """Build a Failure chain from ``(kind, message)`` pairs, outermost first."""
    return _build_chain


@pytest.fixture
def raised_chain() -> BaseException:
    """An OSError raised explicitly from a FileNotFoundError."""
    try:
        try:
            raise FileNotFoundError("inner")
        except FileNotFoundError as exc:
            raise OSError("outer") from exc
    except OSError as exc:
        return exc


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings that ignore the environment and serve files from ``tmp_path``."""
    return Settings(_env_file=None, files_root=str(tmp_path))


@pytest.fixture
def client(settings: Settings):
    from app.main import app

    app.dependency_overrides[get_settings] = lambda: settings
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
