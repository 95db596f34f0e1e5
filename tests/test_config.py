import pytest

from pgbrowser.common.config import Settings, get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
  get_settings.cache_clear()
  yield
  get_settings.cache_clear()


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
  for name in ('HOST', 'PORT', 'API_URL', 'DB_DRIVER', 'DB_SSLMODE', 'REQUEST_TIMEOUT', 'LOG_LEVEL'):
    monkeypatch.delenv(name, raising=False)

  assert get_settings() == Settings()


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
  monkeypatch.setenv('PORT', '8080')
  monkeypatch.setenv('API_URL', 'http://proxy.internal:8080/')
  monkeypatch.setenv('DB_SSLMODE', 'verify-full')
  monkeypatch.setenv('REQUEST_TIMEOUT', '2.5')

  settings = get_settings()

  assert settings.port == 8080
  assert settings.api_url == 'http://proxy.internal:8080'
  assert settings.db_sslmode == 'verify-full'
  assert settings.request_timeout == 2.5


def test_invalid_port(monkeypatch: pytest.MonkeyPatch) -> None:
  monkeypatch.setenv('PORT', 'eighty')
  with pytest.raises(ValueError):
    get_settings()
