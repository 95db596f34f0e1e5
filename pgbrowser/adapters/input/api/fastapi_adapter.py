"""FastAPI adapter exposing the proxy endpoints over HTTP."""
from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from pgbrowser.application.commands.database_commands import (
  ConnectionTestCommand,
  QueryExecutionCommand,
  TableListingCommand,
)
from pgbrowser.application.queries.operation_result import OperationResult
from pgbrowser.domain.value_objects.connection_parameters import DEFAULT_PORT, ConnectionParameters
from pgbrowser.ports.input.query_proxy_service import QueryProxyService
from pgbrowser.ports.input.result_presenter import ResultPresenter


class ConnectionPayload(BaseModel):
  host: str = Field(..., description='Database server host name or address')
  port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, description='Database server port')
  user: str = Field(..., description='Database role to authenticate as')
  password: Optional[str] = Field(default='', description='Password for the role')
  database: str = Field(..., description='Database name')
  ssl: bool = Field(default=False, description='Force TLS without certificate verification')

  @field_validator('ssl', mode='before')
  @classmethod
  def coerce_ssl(cls, v):
    """Accept the ``{rejectUnauthorized: false}`` object some clients send."""
    if v is None:
      return False
    if isinstance(v, dict):
      return True
    return v

  def to_params(self) -> ConnectionParameters:
    return ConnectionParameters(
      host=self.host,
      port=self.port,
      user=self.user,
      password=self.password or '',
      database=self.database,
      tls_insecure_allowed=self.ssl,
    )


class QueryPayload(ConnectionPayload):
  query: str = Field(..., description='SQL text, executed verbatim')

  model_config = {
    'json_schema_extra': {
      'examples': [
        {
          'host': 'localhost',
          'port': 5432,
          'user': 'postgres',
          'password': 'postgres',
          'database': 'postgres',
          'query': 'SELECT 1 AS x',
        }
      ]
    }
  }


def _describe_validation_error(exc: RequestValidationError) -> str:
  messages = []
  for error in exc.errors():
    location = '.'.join(str(part) for part in error.get('loc', ()) if part != 'body')
    messages.append(f'{location}: {error.get("msg")}' if location else str(error.get('msg')))
  return '; '.join(messages) or 'Invalid request'


class FastAPIAdapter:
  def __init__(self, query_service: QueryProxyService, presenter: ResultPresenter):
    self._query_service = query_service
    self._presenter = presenter
    self.app = FastAPI(
      title='pgbrowser API',
      version='0.1.0',
      description='Stateless proxy that tests PostgreSQL connections, lists tables '
                  'and runs arbitrary SQL with caller-supplied credentials.',
    )
    self.app.add_middleware(
      CORSMiddleware,
      allow_origins=['*'],
      allow_methods=['*'],
      allow_headers=['*'],
    )
    self._configure_error_handlers()
    self._configure_routes()

  def _configure_error_handlers(self) -> None:
    @self.app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
      return JSONResponse(
        status_code=400,
        content=self._presenter.present_error(ValueError(_describe_validation_error(exc))),
      )

  def _configure_routes(self) -> None:
    @self.app.post('/api/test-connection', tags=['Database'])
    async def test_connection(payload: ConnectionPayload):
      """Open and immediately close a connection."""
      result = await self._query_service.test_connection(
        ConnectionTestCommand(params=payload.to_params())
      )
      return self._respond(result)

    @self.app.post('/api/list-tables', tags=['Database'])
    async def list_tables(payload: ConnectionPayload):
      """List base tables outside pg_catalog and information_schema."""
      result = await self._query_service.list_tables(
        TableListingCommand(params=payload.to_params())
      )
      return self._respond(result)

    @self.app.post('/api/query', tags=['Database'])
    async def query(payload: QueryPayload):
      """
      Execute arbitrary SQL against the target database.

      The statement is sent verbatim in autocommit mode; DDL and DML are allowed.
      Statements that return no rows answer with empty `columns` and `rows`.
      A blank or whitespace-only `query` is rejected with 400 before any
      connection is opened.
      """
      try:
        command = QueryExecutionCommand(params=payload.to_params(), sql=payload.query)
      except ValueError as exc:
        return JSONResponse(status_code=400, content=self._presenter.present_error(exc))
      result = await self._query_service.execute_query(command)
      return self._respond(result)

    @self.app.get('/health', tags=['Health'])
    async def health():
      """Health check endpoint."""
      return {'status': 'healthy'}

  def _respond(self, result: OperationResult) -> JSONResponse:
    content: Any = jsonable_encoder(self._presenter.present(result))
    return JSONResponse(status_code=200 if result.ok else 400, content=content)
