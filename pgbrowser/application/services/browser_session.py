"""Client-side state for the database browser."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pgbrowser.application.queries.operation_result import OperationResult
from pgbrowser.common.errors import BrowserStateError
from pgbrowser.domain.entities.table_descriptor import TableDescriptor
from pgbrowser.domain.value_objects.connection_parameters import (
  ConnectionParameters,
  parse_connection_string,
)
from pgbrowser.ports.output.query_proxy_client import QueryProxyClient

logger = logging.getLogger(__name__)


def _display(value: Any) -> str:
  return 'null' if value is None else str(value)


class BrowserView(str, Enum):
  FORM = 'form'
  CONNECTED = 'connected'
  TABLE_SELECTED = 'table_selected'


@dataclass
class ResultGrid:
  """Columns and rows currently shown in one result panel."""

  columns: List[str] = field(default_factory=list)
  rows: List[Dict[str, Any]] = field(default_factory=list)

  @staticmethod
  def from_result(result: OperationResult) -> 'ResultGrid':
    return ResultGrid(columns=list(result.columns), rows=list(result.rows))

  def display_rows(self) -> List[Dict[str, str]]:
    """Rows with every cell coerced to text, keyed in column order; SQL NULL shows as ``null``."""
    return [{column: _display(row.get(column)) for column in self.columns} for row in self.rows]


@dataclass
class ConnectionForm:
  """Raw text typed into the connection form."""

  host: str = ''
  port: str = '5432'
  user: str = ''
  password: str = ''
  database: str = ''

  def missing_fields(self) -> List[str]:
    required = (('host', self.host), ('port', self.port), ('user', self.user), ('database', self.database))
    return [name for name, value in required if not value.strip()]

  def to_params(self) -> ConnectionParameters:
    port = self.port.strip()
    if not port.isdigit():
      raise ValueError(f'Invalid port: {self.port}')
    return ConnectionParameters(
      host=self.host.strip(),
      port=int(port),
      user=self.user.strip(),
      password=self.password,
      database=self.database.strip(),
    )


@dataclass
class BrowserState:
  view: BrowserView = BrowserView.FORM
  params: Optional[ConnectionParameters] = None
  tables: List[TableDescriptor] = field(default_factory=list)
  selected_table: Optional[TableDescriptor] = None
  table_data: ResultGrid = field(default_factory=ResultGrid)
  sql_result: ResultGrid = field(default_factory=ResultGrid)
  error: str = ''
  sql_error: str = ''


class BrowserSession:
  """Drives the proxy operations and records their outcome.

  Views only move forward: FORM -> CONNECTED -> TABLE_SELECTED. There is no
  disconnect; a fresh session is the only way back to the form.
  """

  def __init__(self, client: QueryProxyClient):
    self._client = client
    self.state = BrowserState()

  @property
  def connected(self) -> bool:
    return self.state.view != BrowserView.FORM

  def connect_with_form(self, form: ConnectionForm) -> bool:
    missing = form.missing_fields()
    if missing:
      self.state.error = f'Missing required fields: {", ".join(missing)}'
      return False
    try:
      params = form.to_params()
    except ValueError as exc:
      self.state.error = str(exc)
      return False
    return self._connect(params)

  def connect_with_string(self, connection_string: str) -> bool:
    params = parse_connection_string(connection_string)
    if params is None:
      self.state.error = 'Invalid connection string'
      return False
    return self._connect(params)

  def select_table(self, table: TableDescriptor) -> bool:
    params = self._require_connection()
    self.state.view = BrowserView.TABLE_SELECTED
    self.state.selected_table = table
    self.state.table_data = ResultGrid()
    self.state.error = ''

    result = self._client.execute_query(params, table.preview_query())
    if not result.ok:
      self.state.error = result.error or 'Failed to fetch table data'
      return False
    self.state.table_data = ResultGrid.from_result(result)
    return True

  def run_sql(self, sql: str) -> bool:
    params = self._require_connection()
    self.state.sql_error = ''
    self.state.sql_result = ResultGrid()
    if not sql.strip():
      self.state.sql_error = 'Query is required'
      return False

    result = self._client.execute_query(params, sql)
    if not result.ok:
      self.state.sql_error = result.error or 'Query failed'
      return False
    self.state.sql_result = ResultGrid.from_result(result)

    selected = self.state.selected_table
    if selected is not None and selected.name.lower() in sql.lower():
      self.select_table(selected)
    return True

  def _connect(self, params: ConnectionParameters) -> bool:
    if self.connected:
      raise BrowserStateError('Already connected; start a new session to change database')

    self.state.error = ''
    self.state.tables = []
    self.state.selected_table = None
    self.state.table_data = ResultGrid()

    result = self._client.test_connection(params)
    if not result.ok:
      self.state.error = result.error or 'Unknown error'
      return False

    logger.info('Connected to %s:%s/%s', params.host, params.port, params.database)
    self.state.view = BrowserView.CONNECTED
    self.state.params = params

    tables = self._client.list_tables(params)
    if tables.ok:
      self.state.tables = list(tables.tables)
    else:
      self.state.error = tables.error or 'Failed to fetch tables'
    return True

  def _require_connection(self) -> ConnectionParameters:
    if not self.connected or self.state.params is None:
      raise BrowserStateError('Not connected to a database')
    return self.state.params
