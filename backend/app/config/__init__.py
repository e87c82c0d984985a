# backend/app/config/__init__.py
from __future__ import annotations

"""
Shortcut imports for configuration.

Routes take settings through ``Depends(get_settings)`` so tests can
override them; services accept an explicit ``Settings`` instance.
"""

from .settings import Settings, get_settings  # noqa: F401
