"""Logging setup shared by the entrypoints."""
from __future__ import annotations

import logging
from typing import Any

_LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'


def configure_logging(level: str) -> None:
  logging.basicConfig(
    level=getattr(logging, level.upper(), logging.INFO),
    format=_LOG_FORMAT,
  )


def log_extra(**kwargs: Any) -> dict[str, Any]:
  """Drop empty values so log records only carry what is known."""
  return {k: v for k, v in kwargs.items() if v is not None}
