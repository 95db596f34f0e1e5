"""Output port for database operations."""
from __future__ import annotations

from typing import List, Protocol

from pgbrowser.domain.entities.query_result import QueryResult
from pgbrowser.domain.entities.table_descriptor import TableDescriptor
from pgbrowser.domain.value_objects.connection_parameters import ConnectionParameters


class DatabaseRepository(Protocol):
  """Defines how the application reaches a database.

  Each call opens its own connection and releases it before returning,
  whether it succeeds or raises.
  """

  def test_connection(self, params: ConnectionParameters) -> None:
    """Open and close a connection; raise if that is not possible."""
    ...

  def list_tables(self, params: ConnectionParameters) -> List[TableDescriptor]:
    """Return base tables outside the system schemas, ordered by (schema, name)."""
    ...

  def execute(self, params: ConnectionParameters, sql: str) -> QueryResult:
    """Execute ``sql`` verbatim and return whatever rows it produced."""
    ...
