"""Tests for settings and logging setup."""

import logging

import pytest
from pydantic import ValidationError

from spaceapi_server.core.config import Settings
from spaceapi_server.core.log import configure_logging


class TestSettings:

    def test_defaults(self, monkeypatch) -> None:
        monkeypatch.delenv("SPACEAPI_SQLITE_PATH", raising=False)
        monkeypatch.delenv("SPACEAPI_STORE_BACKEND", raising=False)
        s = Settings(_env_file=None)
        assert s.sqlite_path == "spaceapi.db"
        assert s.store_pool_size == 4
        assert s.status_path is None
        assert s.store_backend == "sqlite"

    def test_environment_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("SPACEAPI_SQLITE_PATH", "/var/lib/spaceapi/values.db")
        monkeypatch.setenv("SPACEAPI_STORE_POOL_TIMEOUT_SECONDS", "0.5")
        s = Settings(_env_file=None)
        assert s.sqlite_path == "/var/lib/spaceapi/values.db"
        assert s.store_pool_timeout_seconds == 0.5

    def test_pool_size_must_be_positive(self, monkeypatch) -> None:
        monkeypatch.setenv("SPACEAPI_STORE_POOL_SIZE", "0")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_redis_backend_selected_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("SPACEAPI_STORE_BACKEND", "redis")
        monkeypatch.setenv("SPACEAPI_REDIS_URL", "redis://redis.local:6379/2")
        s = Settings(_env_file=None)
        assert s.store_backend == "redis"
        assert s.redis_url == "redis://redis.local:6379/2"

    def test_unknown_backend_rejected(self, monkeypatch) -> None:
        monkeypatch.setenv("SPACEAPI_STORE_BACKEND", "memcached")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)


def test_configure_logging_is_idempotent(tmp_path) -> None:
    root = logging.getLogger()
    before = list(root.handlers)
    try:
        configure_logging("DEBUG", str(tmp_path / "spaceapi.log"))
        configure_logging("DEBUG", str(tmp_path / "spaceapi.log"))
        ours = [h for h in root.handlers if getattr(h, "_spaceapi", False)]
        assert len(ours) == 2
        assert root.level == logging.DEBUG
        assert logging.getLogger("aiosqlite").level == logging.WARNING

        configure_logging("INFO", "")
        ours = [h for h in root.handlers if getattr(h, "_spaceapi", False)]
        assert len(ours) == 1
    finally:
        for h in list(root.handlers):
            if h not in before:
                root.removeHandler(h)
                h.close()
        root.setLevel(logging.WARNING)
