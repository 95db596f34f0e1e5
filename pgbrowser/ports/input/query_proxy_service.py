"""Input port defining the query proxy service contract."""
from __future__ import annotations

from typing import Protocol

from pgbrowser.application.commands.database_commands import (
  ConnectionTestCommand,
  QueryExecutionCommand,
  TableListingCommand,
)
from pgbrowser.application.queries.operation_result import OperationResult


class QueryProxyService(Protocol):
  async def test_connection(self, command: ConnectionTestCommand) -> OperationResult:
    ...

  async def list_tables(self, command: TableListingCommand) -> OperationResult:
    ...

  async def execute_query(self, command: QueryExecutionCommand) -> OperationResult:
    ...
