from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import NullPool

from pgbrowser.adapters.output.database.sqlalchemy_repository import SqlAlchemyDatabaseRepository
from pgbrowser.application.queries.operation_result import OperationKind, OperationResult
from pgbrowser.common.container import build_query_proxy_service
from pgbrowser.domain.entities.table_descriptor import TableDescriptor
from pgbrowser.domain.value_objects.connection_parameters import ConnectionParameters

CATALOG_ROWS = [
  ('public', 'orders', 'BASE TABLE'),
  ('pg_catalog', 'pg_class', 'BASE TABLE'),
  ('information_schema', 'sql_features', 'BASE TABLE'),
  ('audit', 'events', 'BASE TABLE'),
  ('public', 'customers', 'BASE TABLE'),
  ('public', 'order_totals', 'VIEW'),
]


class SqliteEngineFactory:
  """Hands out SQLite engines and records every pooled connection they lend."""

  def __init__(self, url: str, catalog: Optional[Path] = None):
    self.url = url
    self.catalog = catalog
    self.checkouts = 0
    self.checkins = 0
    self.dbapi_connections: List[Any] = []
    self.params_seen: List[ConnectionParameters] = []

  def __call__(self, params: ConnectionParameters) -> Engine:
    self.params_seen.append(params)
    engine = create_engine(self.url, poolclass=NullPool)
    event.listen(engine, 'connect', self._on_connect)
    event.listen(engine, 'checkout', self._on_checkout)
    event.listen(engine, 'checkin', self._on_checkin)
    return engine

  @property
  def all_closed(self) -> bool:
    for connection in self.dbapi_connections:
      try:
        connection.execute('SELECT 1')
      except sqlite3.ProgrammingError:
        continue
      return False
    return True

  def _on_connect(self, dbapi_connection, connection_record) -> None:
    if self.catalog is not None:
      cursor = dbapi_connection.cursor()
      cursor.execute(f"ATTACH DATABASE '{self.catalog}' AS information_schema")
      cursor.close()

  def _on_checkout(self, dbapi_connection, connection_record, connection_proxy) -> None:
    self.checkouts += 1
    self.dbapi_connections.append(dbapi_connection)

  def _on_checkin(self, dbapi_connection, connection_record) -> None:
    self.checkins += 1


def _write_catalog(path: Path) -> Path:
  connection = sqlite3.connect(path)
  connection.execute('CREATE TABLE tables (table_schema TEXT, table_name TEXT, table_type TEXT)')
  connection.executemany('INSERT INTO tables VALUES (?, ?, ?)', CATALOG_ROWS)
  connection.commit()
  connection.close()
  return path


@pytest.fixture
def params() -> ConnectionParameters:
  return ConnectionParameters(host='db.local', user='alice', password='s3cret', database='shop')


@pytest.fixture
def engine_factory(tmp_path: Path) -> SqliteEngineFactory:
  catalog = _write_catalog(tmp_path / 'catalog.db')
  return SqliteEngineFactory(f'sqlite:///{tmp_path / "shop.db"}', catalog=catalog)


@pytest.fixture
def unreachable_factory(tmp_path: Path) -> SqliteEngineFactory:
  return SqliteEngineFactory(f'sqlite:///{tmp_path / "missing" / "shop.db"}')


@pytest.fixture
def repository(engine_factory: SqliteEngineFactory) -> SqlAlchemyDatabaseRepository:
  return SqlAlchemyDatabaseRepository(engine_factory=engine_factory)


@pytest.fixture
def query_service(repository: SqlAlchemyDatabaseRepository):
  return build_query_proxy_service(repository)


class FakeProxyClient:
  """Scripted stand-in for the HTTP client used by the browser session."""

  def __init__(self) -> None:
    self.calls: List[tuple] = []
    self.connection_result = OperationResult.success(operation=OperationKind.TEST_CONNECTION)
    self.tables_result = OperationResult.success(
      operation=OperationKind.LIST_TABLES,
      tables=[TableDescriptor('public', 'customers'), TableDescriptor('public', 'orders')],
    )
    self.query_results: Dict[str, OperationResult] = {}
    self.default_query_result = OperationResult.success(
      operation=OperationKind.QUERY, columns=['id'], rows=[{'id': 1}],
    )

  def test_connection(self, params: ConnectionParameters) -> OperationResult:
    self.calls.append(('test_connection', params))
    return self.connection_result

  def list_tables(self, params: ConnectionParameters) -> OperationResult:
    self.calls.append(('list_tables', params))
    return self.tables_result

  def execute_query(self, params: ConnectionParameters, sql: str) -> OperationResult:
    self.calls.append(('execute_query', params, sql))
    return self.query_results.get(sql, self.default_query_result)

  def call_names(self) -> List[str]:
    return [call[0] for call in self.calls]

  def queries(self) -> List[str]:
    return [call[2] for call in self.calls if call[0] == 'execute_query']


@pytest.fixture
def fake_client() -> FakeProxyClient:
  return FakeProxyClient()
