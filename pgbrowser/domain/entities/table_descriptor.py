"""Domain entity for a table discovered through catalog introspection."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping

PREVIEW_ROW_LIMIT = 100


@dataclass(frozen=True)
class TableDescriptor:
  """A ``(schema, name)`` pair identifying one base table."""

  schema: str
  name: str

  @property
  def qualified_name(self) -> str:
    return f'{self.schema}.{self.name}'

  def preview_query(self, limit: int = PREVIEW_ROW_LIMIT) -> str:
    # Identifiers are quoted but embedded double quotes are not escaped.
    return f'SELECT * FROM "{self.schema}"."{self.name}" LIMIT {limit};'

  def as_dict(self) -> Dict[str, str]:
    return {'table_schema': self.schema, 'table_name': self.name}

  @staticmethod
  def from_mapping(data: Mapping[str, object]) -> 'TableDescriptor':
    return TableDescriptor(schema=str(data['table_schema']), name=str(data['table_name']))
