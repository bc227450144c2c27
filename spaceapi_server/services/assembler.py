from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..domain.errors import KeyMissing, StoreError
from ..domain.interfaces import KeyValueStore
from ..domain.models import Sensors, StatusDocument
from ..domain.modifiers import StatusModifier
from ..domain.registry import SensorRegistry


class StatusAssembler:
    """Builds the status document for one read request.

    Every call starts from a deep copy of the static template, reads each
    registered sensor from the store, runs the modifiers in registration
    order and serializes the result. Sensors whose value cannot be read are
    left out; the document is still returned.
    """

    def __init__(
        self,
        template: StatusDocument,
        registry: SensorRegistry,
        modifiers: Sequence[StatusModifier],
        store: KeyValueStore,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._template = template
        self._registry = registry
        self._modifiers = tuple(modifiers)
        self._store = store
        self._log = logger or logging.getLogger(__name__)

    async def assemble(self) -> StatusDocument:
        status = self._template.model_copy(deep=True)

        for spec in self._registry:
            try:
                value = await self._store.get(spec.data_key)
            except StoreError as e:
                self._log.warning(
                    "Could not retrieve key '%s' from store, omitting the sensor", spec.data_key
                )
                if isinstance(e, KeyMissing):
                    self._log.debug("Error: %s (%s)", type(e).__name__, e)
                else:
                    self._log.warning("Error: %s (%s)", type(e).__name__, e)
                continue

            if status.sensors is None:
                status.sensors = Sensors()
            spec.template.to_sensor(value, status.sensors)

        for modifier in self._modifiers:
            modifier.modify(status)

        return status

    async def render(self) -> str:
        """Assembled document as JSON. Raises ``SerializationFault``."""
        status = await self.assemble()
        return status.to_json()
