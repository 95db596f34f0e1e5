"""Application-level configuration utilities."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
  """Immutable application settings loaded from environment variables."""

  host: str = '0.0.0.0'
  port: int = 3001
  api_url: str = 'http://localhost:3001'
  db_driver: str = 'postgresql+psycopg2'
  db_sslmode: str = 'require'
  request_timeout: float = 60.0
  log_level: str = 'INFO'


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  """Load settings from environment variables once per process."""
  env_path = Path(__file__).resolve().parents[2] / '.env'
  if env_path.exists():
    load_dotenv(env_path)
  else:
    load_dotenv()

  from os import getenv

  port = getenv('PORT', '3001')
  if not port.isdigit():
    raise ValueError(f'PORT must be an integer, got {port!r}')

  timeout = getenv('REQUEST_TIMEOUT', '60')
  try:
    request_timeout = float(timeout)
  except ValueError:
    raise ValueError(f'REQUEST_TIMEOUT must be a number, got {timeout!r}') from None

  return Settings(
    host=getenv('HOST', '0.0.0.0'),
    port=int(port),
    api_url=getenv('API_URL', 'http://localhost:3001').rstrip('/'),
    db_driver=getenv('DB_DRIVER', 'postgresql+psycopg2'),
    db_sslmode=getenv('DB_SSLMODE', 'require'),
    request_timeout=request_timeout,
    log_level=getenv('LOG_LEVEL', 'INFO'),
  )
