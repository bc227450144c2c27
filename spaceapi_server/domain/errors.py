"""Exception hierarchy for the status server."""

from __future__ import annotations

import asyncio
import sqlite3

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError


class SpaceApiError(Exception):
    """Base exception for all status server errors."""

    is_client_fault = False


class ConfigurationError(SpaceApiError):
    """Invalid sensor/modifier registration or unreadable status file."""


class SerializationFault(SpaceApiError):
    """The assembled document could not be serialized.

    Indicates a defect (a template or modifier produced data the document
    cannot represent). Never handled at runtime.
    """


class SensorError(SpaceApiError):
    """Base for problems reading or updating sensor values."""

    def __init__(self, message: str, *, reason: str = "") -> None:
        self.reason = reason or message
        super().__init__(message)


class UpdateValidationError(SensorError):
    """Malformed update request."""

    is_client_fault = True


class MissingValueError(UpdateValidationError):
    def __init__(self) -> None:
        super().__init__('"value" parameter not specified')


class TooManyValuesError(UpdateValidationError):
    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__("Too many values specified")


class UnknownSensorError(SensorError):
    """The identifier does not match any registered data key."""

    is_client_fault = True

    def __init__(self, sensor: str) -> None:
        self.sensor = sensor
        super().__init__(f"Unknown sensor: {sensor}")


class StoreError(SensorError):
    """Key-value store operation failed."""

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class StoreUnavailable(StoreError):
    """Network, protocol or engine failure in the underlying store."""


class PoolTimeout(StoreError):
    """No store connection became available within the pool's wait."""


class KeyMissing(StoreError):
    """The key has never been written."""


def _is_pool_exhausted(exc: RedisConnectionError) -> bool:
    # BlockingConnectionPool reports its checkout timeout as a ConnectionError
    return isinstance(exc.__cause__, asyncio.TimeoutError) or str(exc) == "No connection available."


def store_error_from(exc: BaseException, *, key: str = "") -> StoreError:
    """Convert an engine or pool exception into a ``StoreError``."""
    if isinstance(exc, StoreError):
        return exc
    if isinstance(exc, asyncio.TimeoutError):
        return PoolTimeout(f"Timed out waiting for a store connection: {exc}", key=key)
    if isinstance(exc, RedisConnectionError) and _is_pool_exhausted(exc):
        return PoolTimeout(f"Timed out waiting for a store connection: {exc}", key=key)
    if isinstance(exc, RedisError):
        return StoreUnavailable(f"{type(exc).__name__}: {exc}", key=key)
    if isinstance(exc, (sqlite3.Error, OSError)):
        return StoreUnavailable(f"{type(exc).__name__}: {exc}", key=key)
    raise TypeError(f"Not a store error: {exc!r}") from exc
