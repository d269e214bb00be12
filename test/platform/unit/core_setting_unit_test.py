import pytest

from src.platform.config.core_setting import _PROJECT_ROOT, Settings


ENV_EXAMPLE = _PROJECT_ROOT / '.env.example'


@pytest.mark.unit
class TestCorsOrigins:
    def test_comma_separated_env_value(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', 'http://localhost:3000, http://localhost:5173')

        assert Settings(_env_file=ENV_EXAMPLE).BACKEND_CORS_ORIGINS == [
            'http://localhost:3000',
            'http://localhost:5173',
        ]

    def test_json_list_env_value(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', '["https://cinema.example.com"]')

        assert Settings(_env_file=ENV_EXAMPLE).BACKEND_CORS_ORIGINS == ['https://cinema.example.com']

    def test_shipped_env_example_loads(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv('BACKEND_CORS_ORIGINS', raising=False)

        settings = Settings(_env_file=ENV_EXAMPLE)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['http://localhost:3000', 'http://localhost:5173']
        assert settings.DATABASE_URL_ASYNC.startswith('postgresql+asyncpg://')


@pytest.mark.unit
class TestDatabaseUrl:
    def test_full_url_overrides_parts(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('DATABASE_URL', 'sqlite+aiosqlite:///cinema.db')

        assert Settings(_env_file=ENV_EXAMPLE).DATABASE_URL_ASYNC == 'sqlite+aiosqlite:///cinema.db'

    def test_built_from_postgres_parts(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv('DATABASE_URL', raising=False)
        monkeypatch.setenv('POSTGRES_SERVER', 'db')
        monkeypatch.setenv('POSTGRES_PASSWORD', 's3cret')
        monkeypatch.setenv('POSTGRES_DB', 'cinema')

        url = Settings(_env_file=ENV_EXAMPLE).DATABASE_URL_ASYNC

        assert url.startswith('postgresql+asyncpg://')
        assert url.endswith(':s3cret@db:5432/cinema')
