"""Plain text presenter for terminal output."""
from __future__ import annotations

from typing import Any, List, Sequence

from pgbrowser.application.queries.operation_result import OperationKind, OperationResult
from pgbrowser.ports.input.result_presenter import ResultPresenter

_MAX_CELL_WIDTH = 40


def _cell(value: Any) -> str:
  text = str(value).replace('\n', ' ')
  if len(text) > _MAX_CELL_WIDTH:
    return text[:_MAX_CELL_WIDTH - 3] + '...'
  return text


def render_table(columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> List[str]:
  """Lay out ``rows`` under ``columns`` as fixed-width text lines."""
  cells = [[_cell(value) for value in row] for row in rows]
  headers = [_cell(column) for column in columns]
  widths = [len(header) for header in headers]
  for row in cells:
    for index, value in enumerate(row):
      widths[index] = max(widths[index], len(value))

  lines = [
    ' | '.join(header.ljust(width) for header, width in zip(headers, widths)),
    '-+-'.join('-' * width for width in widths),
  ]
  for row in cells:
    lines.append(' | '.join(value.ljust(width) for value, width in zip(row, widths)))
  return lines


class TextPresenter(ResultPresenter):
  def present(self, result: OperationResult) -> str:
    if not result.ok:
      return f'ERROR: {result.error}'

    if result.operation == OperationKind.LIST_TABLES:
      if not result.tables:
        return 'No tables found.'
      lines = [table.qualified_name for table in result.tables]
      lines.append('')
      lines.append(f'{len(result.tables)} table(s)')
      return '\n'.join(lines)

    if result.operation == OperationKind.QUERY:
      if not result.columns:
        return f'OK ({result.execution_time:.2f}s)'
      rows = [[row.get(column) for column in result.columns] for row in result.rows]
      lines = render_table(result.columns, rows)
      lines.append('')
      lines.append(f'{len(result.rows)} row(s) in {result.execution_time:.2f}s')
      return '\n'.join(lines)

    return 'Connection successful.'

  def present_error(self, error: Exception) -> str:
    return f'ERROR: {error}'
