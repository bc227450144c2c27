from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..domain.errors import MissingValueError, StoreError, TooManyValuesError
from ..domain.interfaces import KeyValueStore
from ..domain.registry import SensorRegistry


class SensorUpdater:
    """Validates a single sensor update and writes it through to the store."""

    def __init__(
        self,
        registry: SensorRegistry,
        store: KeyValueStore,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._registry = registry
        self._store = store
        self._log = logger or logging.getLogger(__name__)

    async def update(self, sensor: str, values: Sequence[str]) -> None:
        """Store the one value in ``values`` under the sensor's data key.

        Raises ``MissingValueError``/``TooManyValuesError`` when ``values``
        does not hold exactly one item, ``UnknownSensorError`` when no spec
        has ``sensor`` as data key, and ``StoreError`` when the write fails.
        Nothing is written unless validation passes.
        """
        if not values:
            raise MissingValueError()
        if len(values) > 1:
            raise TooManyValuesError(len(values))
        value = values[0]

        spec = self._registry.find(sensor)

        try:
            await self._store.set(spec.data_key, value)
        except StoreError as e:
            self._log.error(
                "Updating sensor value for sensor \"%s\" failed: %s (%s)",
                sensor, type(e).__name__, e,
            )
            raise
        self._log.info("Sensor \"%s\" updated to %r", sensor, value)
