"""Input port for formatting operation results."""
from __future__ import annotations

from typing import Any, Protocol

from pgbrowser.application.queries.operation_result import OperationResult


class ResultPresenter(Protocol):
  def present(self, result: OperationResult) -> Any:
    ...

  def present_error(self, error: Exception) -> Any:
    ...
