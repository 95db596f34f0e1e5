import requests

from pgbrowser.adapters.output.http.requests_proxy_client import RequestsQueryProxyClient
from pgbrowser.application.queries.operation_result import OperationKind
from pgbrowser.domain.entities.table_descriptor import TableDescriptor


class StubResponse:
  def __init__(self, status_code, body=None, reason='OK'):
    self.status_code = status_code
    self.reason = reason
    self._body = body

  def json(self):
    if self._body is None:
      raise ValueError('No JSON object could be decoded')
    return self._body


class StubSession:
  def __init__(self, response=None, error=None):
    self.response = response
    self.error = error
    self.requests = []

  def post(self, url, json=None, timeout=None):
    self.requests.append({'url': url, 'json': json, 'timeout': timeout})
    if self.error is not None:
      raise self.error
    return self.response


def test_posts_connection_payload(params) -> None:
  session = StubSession(StubResponse(200, {'success': True}))
  client = RequestsQueryProxyClient('http://proxy:3001/', timeout=5, session=session)

  result = client.test_connection(params)

  assert result.ok
  assert result.operation == OperationKind.TEST_CONNECTION
  assert session.requests == [{
    'url': 'http://proxy:3001/api/test-connection',
    'json': {
      'host': 'db.local', 'port': 5432, 'user': 'alice',
      'password': 's3cret', 'database': 'shop', 'ssl': False,
    },
    'timeout': 5,
  }]


def test_list_tables_parses_descriptors(params) -> None:
  body = {'success': True, 'tables': [{'table_schema': 'public', 'table_name': 'orders'}]}
  client = RequestsQueryProxyClient('http://proxy', session=StubSession(StubResponse(200, body)))

  result = client.list_tables(params)

  assert result.tables == [TableDescriptor('public', 'orders')]


def test_query_sends_sql_and_parses_rows(params) -> None:
  session = StubSession(StubResponse(200, {'success': True, 'columns': ['x'], 'rows': [{'x': 1}]}))
  client = RequestsQueryProxyClient('http://proxy', session=session)

  result = client.execute_query(params, 'SELECT 1 AS x')

  assert session.requests[0]['url'] == 'http://proxy/api/query'
  assert session.requests[0]['json']['query'] == 'SELECT 1 AS x'
  assert result.columns == ['x']
  assert result.rows == [{'x': 1}]


def test_error_body_becomes_failure(params) -> None:
  response = StubResponse(400, {'success': False, 'error': 'syntax error at or near "SELEC"'}, 'Bad Request')
  client = RequestsQueryProxyClient('http://proxy', session=StubSession(response))

  result = client.execute_query(params, 'SELEC 1')

  assert not result.ok
  assert result.error == 'syntax error at or near "SELEC"'


def test_transport_error_becomes_failure(params) -> None:
  session = StubSession(error=requests.ConnectionError('Connection refused'))
  client = RequestsQueryProxyClient('http://proxy', session=session)

  result = client.test_connection(params)

  assert not result.ok
  assert 'Connection refused' in result.error


def test_non_json_response_becomes_failure(params) -> None:
  session = StubSession(StubResponse(502, None, 'Bad Gateway'))
  client = RequestsQueryProxyClient('http://proxy', session=session)

  result = client.list_tables(params)

  assert not result.ok
  assert result.error == '502 Bad Gateway'
