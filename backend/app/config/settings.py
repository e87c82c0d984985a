from __future__ import annotations

"""backend/app/config/settings.py

Application configuration using environment-driven settings.

This module centralizes:
- application identity and logging level
- CORS configuration
- default delimiters used when rendering failure chains over HTTP
- file reader behaviour (served root, context capture, size limit)
"""
from functools import lru_cache
from typing import List

from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
  app_name: str = "faultline"
  environment: str = "development"
  log_level: str = "INFO"

  # CORS
  allowed_origins: List[AnyHttpUrl] = [
      "http://localhost:3000",
      "http://127.0.0.1:3000",
  ]

  # Failure chain rendering (empty means "use the formatter's default")
  line_delimiter: str = ""
  field_delimiter: str = ""

  # File reader: only paths under files_root are served
  files_root: str = "."
  capture_environment: bool = True
  max_file_bytes: int = 1_048_576

  model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  """Return a cached Settings instance."""
  return Settings()
