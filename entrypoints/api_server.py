"""API server entrypoint."""
from __future__ import annotations

import sys
from pathlib import Path

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import uvicorn

from pgbrowser.adapters.input.api.fastapi_adapter import FastAPIAdapter
from pgbrowser.adapters.presentation.json_presenter import JsonPresenter
from pgbrowser.common.config import get_settings
from pgbrowser.common.container import create_query_proxy_service
from pgbrowser.common.logging_utils import configure_logging


def get_app():
  query_service = create_query_proxy_service()
  presenter = JsonPresenter()
  adapter = FastAPIAdapter(query_service, presenter)
  return adapter.app


def main() -> None:
  settings = get_settings()
  configure_logging(settings.log_level)
  uvicorn.run(get_app(), host=settings.host, port=settings.port)


if __name__ == '__main__':
  main()
