"""Command objects for the three proxy operations."""
from __future__ import annotations

from dataclasses import dataclass

from pgbrowser.domain.value_objects.connection_parameters import ConnectionParameters


@dataclass(frozen=True)
class ConnectionTestCommand:
  params: ConnectionParameters


@dataclass(frozen=True)
class TableListingCommand:
  params: ConnectionParameters


@dataclass(frozen=True)
class QueryExecutionCommand:
  params: ConnectionParameters
  sql: str

  def __post_init__(self) -> None:
    if not self.sql or not self.sql.strip():
      raise ValueError('query is required')
