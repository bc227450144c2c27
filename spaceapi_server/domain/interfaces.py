from __future__ import annotations
from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Single-key string store. ``get``/``set`` raise ``StoreError`` subclasses."""

    async def open(self) -> None:
        ...

    async def close(self) -> None:
        ...

    async def get(self, key: str) -> str:
        ...

    async def set(self, key: str, value: str) -> None:
        ...
