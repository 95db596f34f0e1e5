"""SQLAlchemy-powered database repository implementation."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool

from pgbrowser.common.errors import DatabaseOperationError
from pgbrowser.domain.entities.query_result import QueryResult
from pgbrowser.domain.entities.table_descriptor import TableDescriptor
from pgbrowser.domain.value_objects.connection_parameters import ConnectionParameters
from pgbrowser.ports.output.database_repository import DatabaseRepository

LIST_TABLES_SQL = """
SELECT table_schema, table_name
FROM information_schema.tables
WHERE table_type = 'BASE TABLE' AND table_schema NOT IN ('pg_catalog', 'information_schema')
ORDER BY table_schema, table_name;
"""

EngineFactory = Callable[[ConnectionParameters], Engine]

logger = logging.getLogger(__name__)


def driver_message(exc: SQLAlchemyError) -> str:
  """Return the DBAPI driver's text for ``exc`` without SQLAlchemy's decorations."""
  dbapi_error = getattr(exc, 'orig', None)
  message = str(dbapi_error) if dbapi_error is not None else str(exc)
  return message.strip() or exc.__class__.__name__


class SqlAlchemyDatabaseRepository(DatabaseRepository):
  """Opens a dedicated engine for every call and disposes of it afterwards.

  ``NullPool`` makes closing the connection close the underlying socket, so
  nothing outlives the call that opened it.
  """

  def __init__(
    self,
    driver: str = 'postgresql+psycopg2',
    default_sslmode: Optional[str] = 'require',
    engine_factory: Optional[EngineFactory] = None,
  ) -> None:
    self._driver = driver
    self._default_sslmode = default_sslmode
    self._engine_factory = engine_factory or self._create_engine

  def test_connection(self, params: ConnectionParameters) -> None:
    with self._connect(params):
      pass

  def list_tables(self, params: ConnectionParameters) -> List[TableDescriptor]:
    with self._connect(params) as connection:
      result = connection.execute(text(LIST_TABLES_SQL))
      return [TableDescriptor.from_mapping(row._mapping) for row in result]

  def execute(self, params: ConnectionParameters, sql: str) -> QueryResult:
    with self._connect(params) as connection:
      # Autocommit so DDL/DML persist; no_parameters keeps '%' and ':' literal.
      connection.execution_options(isolation_level='AUTOCOMMIT', no_parameters=True)
      result = connection.exec_driver_sql(sql)
      if not result.returns_rows:
        return QueryResult()
      columns = list(result.keys())
      rows = [dict(row._mapping) for row in result]
      return QueryResult(columns=columns, rows=rows)

  def build_url(self, params: ConnectionParameters) -> URL:
    sslmode = 'require' if params.tls_insecure_allowed else self._default_sslmode
    return URL.create(
      self._driver,
      username=params.user or None,
      password=params.password or None,
      host=params.host,
      port=params.port,
      database=params.database,
      query={'sslmode': sslmode} if sslmode else {},
    )

  def _create_engine(self, params: ConnectionParameters) -> Engine:
    return create_engine(self.build_url(params), poolclass=NullPool)

  @contextmanager
  def _connect(self, params: ConnectionParameters) -> Iterator[Connection]:
    try:
      engine = self._engine_factory(params)
    except SQLAlchemyError as exc:
      raise DatabaseOperationError(driver_message(exc)) from exc

    logger.debug('Opening connection to %s:%s/%s', params.host, params.port, params.database)
    try:
      with engine.connect() as connection:
        yield connection
    except SQLAlchemyError as exc:
      raise DatabaseOperationError(driver_message(exc)) from exc
    finally:
      engine.dispose()
