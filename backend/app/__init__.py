# backend/app/__init__.py
from __future__ import annotations

"""
Marks `app` as a Python package.

Routers live in app/api, failure diagnostics and the file reader in
app/services.
"""
