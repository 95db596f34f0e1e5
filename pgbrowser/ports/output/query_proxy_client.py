"""Output port used by the browser client to reach the proxy service."""
from __future__ import annotations

from typing import Protocol

from pgbrowser.application.queries.operation_result import OperationResult
from pgbrowser.domain.value_objects.connection_parameters import ConnectionParameters


class QueryProxyClient(Protocol):
  def test_connection(self, params: ConnectionParameters) -> OperationResult:
    ...

  def list_tables(self, params: ConnectionParameters) -> OperationResult:
    ...

  def execute_query(self, params: ConnectionParameters, sql: str) -> OperationResult:
    ...
