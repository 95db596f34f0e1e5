"""Simple dependency wiring helpers."""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pgbrowser.adapters.output.database.sqlalchemy_repository import SqlAlchemyDatabaseRepository
from pgbrowser.adapters.output.http.requests_proxy_client import RequestsQueryProxyClient
from pgbrowser.application.handlers.database_handlers import (
  ConnectionTestHandler,
  QueryExecutionHandler,
  TableListingHandler,
)
from pgbrowser.application.services.browser_session import BrowserSession
from pgbrowser.application.services.query_proxy_service_impl import QueryProxyServiceImpl
from pgbrowser.common.config import get_settings
from pgbrowser.ports.output.database_repository import DatabaseRepository


def build_query_proxy_service(repository: DatabaseRepository) -> QueryProxyServiceImpl:
  return QueryProxyServiceImpl(
    ConnectionTestHandler(repository),
    TableListingHandler(repository),
    QueryExecutionHandler(repository),
  )


@lru_cache(maxsize=1)
def create_query_proxy_service() -> QueryProxyServiceImpl:
  settings = get_settings()
  repository = SqlAlchemyDatabaseRepository(
    driver=settings.db_driver,
    default_sslmode=settings.db_sslmode or None,
  )
  return build_query_proxy_service(repository)


def create_proxy_client(base_url: Optional[str] = None) -> RequestsQueryProxyClient:
  settings = get_settings()
  return RequestsQueryProxyClient(base_url or settings.api_url, timeout=settings.request_timeout)


def create_browser_session() -> BrowserSession:
  return BrowserSession(create_proxy_client())
