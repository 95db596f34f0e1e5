"""Application handlers for the connection, catalog and query operations."""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, TypeVar

from pgbrowser.application.commands.database_commands import (
  ConnectionTestCommand,
  QueryExecutionCommand,
  TableListingCommand,
)
from pgbrowser.application.queries.operation_result import OperationKind, OperationResult
from pgbrowser.common.logging_utils import log_extra
from pgbrowser.domain.value_objects.connection_parameters import ConnectionParameters
from pgbrowser.ports.output.database_repository import DatabaseRepository

T = TypeVar('T')

logger = logging.getLogger(__name__)


class _DatabaseHandler:
  """Runs one blocking repository call per request off the event loop.

  Every exception raised by the call becomes a failure result carrying the
  exception text; nothing is retried.
  """

  operation: OperationKind

  def __init__(self, repository: DatabaseRepository):
    self._repository = repository

  async def _run(
    self,
    params: ConnectionParameters,
    call: Callable[[], T],
    build: Callable[[T, float], OperationResult],
  ) -> OperationResult:
    name = self.operation.value
    extra = log_extra(operation=name, db_host=params.host, db_name=params.database)
    logger.info('%s on %s/%s', name, params.host, params.database, extra=extra)
    start = time.perf_counter()
    try:
      value = await asyncio.to_thread(call)
    except Exception as exc:  # noqa: BLE001
      execution_time = time.perf_counter() - start
      logger.warning('%s failed: %s', name, exc, extra=extra)
      return OperationResult.failure(
        str(exc) or exc.__class__.__name__,
        operation=self.operation,
        execution_time=execution_time,
      )
    return build(value, time.perf_counter() - start)


class ConnectionTestHandler(_DatabaseHandler):
  operation = OperationKind.TEST_CONNECTION

  async def handle(self, command: ConnectionTestCommand) -> OperationResult:
    return await self._run(
      command.params,
      lambda: self._repository.test_connection(command.params),
      lambda _, elapsed: OperationResult.success(
        operation=self.operation, execution_time=elapsed,
      ),
    )


class TableListingHandler(_DatabaseHandler):
  operation = OperationKind.LIST_TABLES

  async def handle(self, command: TableListingCommand) -> OperationResult:
    return await self._run(
      command.params,
      lambda: self._repository.list_tables(command.params),
      lambda tables, elapsed: OperationResult.success(
        operation=self.operation, tables=list(tables), execution_time=elapsed,
      ),
    )


class QueryExecutionHandler(_DatabaseHandler):
  operation = OperationKind.QUERY

  async def handle(self, command: QueryExecutionCommand) -> OperationResult:
    return await self._run(
      command.params,
      lambda: self._repository.execute(command.params, command.sql),
      lambda result, elapsed: OperationResult.from_query(
        result, operation=self.operation, execution_time=elapsed,
      ),
    )
