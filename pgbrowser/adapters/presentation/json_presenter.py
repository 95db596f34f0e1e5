"""JSON presenter implementation."""
from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Dict

from fastapi.encoders import jsonable_encoder

from pgbrowser.application.queries.operation_result import OperationKind, OperationResult
from pgbrowser.ports.input.result_presenter import ResultPresenter


def _encode_value(value: Any) -> Any:
  """Turn one driver value into something ``json.dumps(allow_nan=False)`` accepts."""
  if value is None or isinstance(value, (bool, int, str)):
    return value
  # bytea values come back as memoryview from psycopg2; render them as Postgres hex text.
  if isinstance(value, (bytes, bytearray, memoryview)):
    return '\\x' + bytes(value).hex()
  if isinstance(value, float):
    return value if math.isfinite(value) else None
  if isinstance(value, Decimal) and not value.is_finite():
    return None
  if isinstance(value, dict):
    return {str(key): _encode_value(item) for key, item in value.items()}
  if isinstance(value, (list, tuple, set, frozenset)):
    return [_encode_value(item) for item in value]

  try:
    encoded = jsonable_encoder(value)
  except (TypeError, ValueError):
    return str(value)
  if isinstance(encoded, (dict, list, float)):
    return _encode_value(encoded)
  return encoded


class JsonPresenter(ResultPresenter):
  """Builds the ``{success, ...}`` envelope returned by every endpoint."""

  def present(self, result: OperationResult) -> Dict[str, Any]:
    if not result.ok:
      return {'success': False, 'error': result.error or 'Unknown error'}

    payload: Dict[str, Any] = {'success': True}
    if result.operation == OperationKind.LIST_TABLES:
      payload['tables'] = [table.as_dict() for table in result.tables]
    elif result.operation == OperationKind.QUERY:
      payload['columns'] = list(result.columns)
      payload['rows'] = [
        {key: _encode_value(value) for key, value in row.items()}
        for row in result.rows
      ]
    return payload

  def present_error(self, error: Exception) -> Dict[str, Any]:
    return {'success': False, 'error': str(error) or error.__class__.__name__}
