"""Implementation of the query proxy service port."""
from __future__ import annotations

from pgbrowser.application.commands.database_commands import (
  ConnectionTestCommand,
  QueryExecutionCommand,
  TableListingCommand,
)
from pgbrowser.application.handlers.database_handlers import (
  ConnectionTestHandler,
  QueryExecutionHandler,
  TableListingHandler,
)
from pgbrowser.application.queries.operation_result import OperationResult
from pgbrowser.ports.input.query_proxy_service import QueryProxyService


class QueryProxyServiceImpl(QueryProxyService):
  """Concrete implementation that delegates to one handler per operation."""

  def __init__(
    self,
    connection_handler: ConnectionTestHandler,
    tables_handler: TableListingHandler,
    query_handler: QueryExecutionHandler,
  ) -> None:
    self._connection_handler = connection_handler
    self._tables_handler = tables_handler
    self._query_handler = query_handler

  async def test_connection(self, command: ConnectionTestCommand) -> OperationResult:
    return await self._connection_handler.handle(command)

  async def list_tables(self, command: TableListingCommand) -> OperationResult:
    return await self._tables_handler.handle(command)

  async def execute_query(self, command: QueryExecutionCommand) -> OperationResult:
    return await self._query_handler.handle(command)
