"""Requests-based client for the query proxy HTTP endpoints."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from pgbrowser.application.queries.operation_result import OperationKind, OperationResult
from pgbrowser.domain.entities.table_descriptor import TableDescriptor
from pgbrowser.domain.value_objects.connection_parameters import ConnectionParameters
from pgbrowser.ports.output.query_proxy_client import QueryProxyClient

logger = logging.getLogger(__name__)


class RequestsQueryProxyClient(QueryProxyClient):
  """Performs the proxy calls over HTTP using the requests library."""

  def __init__(
    self,
    base_url: str,
    timeout: float = 60.0,
    session: Optional[requests.Session] = None,
  ) -> None:
    self._base_url = base_url.rstrip('/')
    self._timeout = timeout
    self._session = session or requests.Session()

  def test_connection(self, params: ConnectionParameters) -> OperationResult:
    return self._post(OperationKind.TEST_CONNECTION, params.to_payload())

  def list_tables(self, params: ConnectionParameters) -> OperationResult:
    return self._post(OperationKind.LIST_TABLES, params.to_payload())

  def execute_query(self, params: ConnectionParameters, sql: str) -> OperationResult:
    payload = params.to_payload()
    payload['query'] = sql
    return self._post(OperationKind.QUERY, payload)

  def _post(self, operation: OperationKind, payload: Dict[str, Any]) -> OperationResult:
    url = f'{self._base_url}/api/{operation.value}'
    try:
      response = self._session.post(url, json=payload, timeout=self._timeout)
    except requests.RequestException as exc:
      logger.warning('POST %s failed: %s', url, exc)
      return OperationResult.failure(str(exc), operation=operation)

    try:
      body = response.json()
    except ValueError:
      return OperationResult.failure(
        f'{response.status_code} {response.reason}'.strip(), operation=operation,
      )

    return self._parse_body(operation, body)

  @staticmethod
  def _parse_body(operation: OperationKind, body: Any) -> OperationResult:
    if not isinstance(body, dict):
      return OperationResult.failure('Unexpected response from server', operation=operation)

    if not body.get('success'):
      return OperationResult.failure(str(body.get('error') or 'Unknown error'), operation=operation)

    return OperationResult.success(
      operation=operation,
      tables=[TableDescriptor.from_mapping(item) for item in body.get('tables') or []],
      columns=[str(column) for column in body.get('columns') or []],
      rows=[dict(row) for row in body.get('rows') or []],
    )
