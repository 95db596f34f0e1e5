"""Streamlit entrypoint."""
from __future__ import annotations

import sys
from pathlib import Path

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pgbrowser.adapters.input.web.streamlit_adapter import StreamlitAdapter
from pgbrowser.common.config import get_settings
from pgbrowser.common.container import create_browser_session
from pgbrowser.common.logging_utils import configure_logging


def main() -> None:
  configure_logging(get_settings().log_level)
  StreamlitAdapter(create_browser_session).render()


if __name__ == '__main__':
  main()
