"""Application-level result of a proxy operation."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pgbrowser.domain.entities.query_result import QueryResult
from pgbrowser.domain.entities.table_descriptor import TableDescriptor


class OperationStatus(str, Enum):
  SUCCESS = 'success'
  FAILURE = 'failure'


class OperationKind(str, Enum):
  TEST_CONNECTION = 'test-connection'
  LIST_TABLES = 'list-tables'
  QUERY = 'query'


@dataclass
class OperationResult:
  status: OperationStatus
  operation: Optional[OperationKind] = None
  tables: List[TableDescriptor] = field(default_factory=list)
  columns: List[str] = field(default_factory=list)
  rows: List[Dict[str, Any]] = field(default_factory=list)
  execution_time: float = 0.0
  timestamp: datetime = field(default_factory=datetime.utcnow)
  error: Optional[str] = None

  @property
  def ok(self) -> bool:
    return self.status == OperationStatus.SUCCESS

  @staticmethod
  def success(**kwargs: Any) -> 'OperationResult':
    return OperationResult(status=OperationStatus.SUCCESS, **kwargs)

  @staticmethod
  def failure(error: str, **kwargs: Any) -> 'OperationResult':
    return OperationResult(status=OperationStatus.FAILURE, error=error, **kwargs)

  @staticmethod
  def from_query(query_result: QueryResult, **kwargs: Any) -> 'OperationResult':
    return OperationResult.success(
      columns=list(query_result.columns),
      rows=[dict(row) for row in query_result.rows],
      **kwargs,
    )
