"""Domain entity for the outcome of an arbitrary SQL statement."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class QueryResult:
  """Column names in result order plus one mapping per returned row.

  Statements that return no rows (DDL, most DML) produce empty lists.
  """

  columns: List[str] = field(default_factory=list)
  rows: List[Dict[str, Any]] = field(default_factory=list)

  @property
  def is_empty(self) -> bool:
    return not self.columns
