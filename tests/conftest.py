"""Pytest fixtures for the status server tests."""

from typing import Dict, List, Optional, Tuple

import pytest
import pytest_asyncio

from spaceapi_server.domain.errors import KeyMissing, StoreError
from spaceapi_server.domain.models import StatusDocument
from spaceapi_server.storage.sqlite_store import SQLiteKeyValueStore


class FakeStore:
    """In-memory store. Keys in ``failures`` raise the mapped error on get and set."""

    def __init__(
        self,
        values: Optional[Dict[str, str]] = None,
        failures: Optional[Dict[str, StoreError]] = None,
    ) -> None:
        self.values: Dict[str, str] = dict(values or {})
        self.failures: Dict[str, StoreError] = dict(failures or {})
        self.reads: List[str] = []
        self.writes: List[Tuple[str, str]] = []
        self.opened = False

    async def open(self) -> None:
        self.opened = True

    async def close(self) -> None:
        self.opened = False

    async def get(self, key: str) -> str:
        self.reads.append(key)
        if key in self.failures:
            raise self.failures[key]
        if key not in self.values:
            raise KeyMissing(f"No value stored for key '{key}'", key=key)
        return self.values[key]

    async def set(self, key: str, value: str) -> None:
        if key in self.failures:
            raise self.failures[key]
        self.writes.append((key, value))
        self.values[key] = value


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def status_template() -> StatusDocument:
    return StatusDocument.model_validate(
        {
            "space": "coredump",
            "logo": "https://www.coredump.ch/logo.png",
            "url": "https://www.coredump.ch/",
            "location": {"address": "Spinnereistrasse 2, 8640 Rapperswil", "lat": 47.22936, "lon": 8.82949},
            "contact": {"irc": "irc://freenode.net/#coredump", "twitter": "@coredump_ch"},
            "issue_report_channels": ["email", "twitter"],
            "state": {"open": False},
            "projects": ["https://github.com/coredump-ch"],
        }
    )


@pytest_asyncio.fixture
async def sqlite_store(tmp_path):
    store = SQLiteKeyValueStore(str(tmp_path / "values.db"), pool_size=2, pool_timeout=0.5)
    await store.open()
    try:
        yield store
    finally:
        await store.close()
