"""CLI entrypoint for pgbrowser."""
from __future__ import annotations

import sys
from pathlib import Path

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pgbrowser.adapters.input.cli.cli_adapter import CLIAdapter
from pgbrowser.adapters.presentation.text_presenter import TextPresenter
from pgbrowser.common.config import get_settings
from pgbrowser.common.container import create_proxy_client, create_query_proxy_service
from pgbrowser.common.logging_utils import configure_logging


def main() -> None:
  configure_logging(get_settings().log_level)
  query_service = create_query_proxy_service()
  presenter = TextPresenter()
  CLIAdapter(query_service, presenter, create_proxy_client).run()


if __name__ == '__main__':
  main()
