from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

from ..sensors.base import SensorTemplate
from .errors import ConfigurationError, UnknownSensorError


@dataclass(frozen=True)
class SensorSpec:
    """A sensor: its static template and the store key holding its value.

    ``data_key`` is also the public identifier used in update requests.
    """

    template: SensorTemplate
    data_key: str


class SensorRegistry:
    """Ordered, read-only collection of sensor specs.

    Built once at startup and shared by all requests.
    """

    __slots__ = ("_specs",)

    def __init__(self, specs: Iterable[SensorSpec] = ()) -> None:
        specs = tuple(specs)
        seen: set[str] = set()
        for spec in specs:
            if not spec.data_key:
                raise ConfigurationError("Sensor data_key must not be empty")
            if spec.data_key in seen:
                raise ConfigurationError(f"Duplicate sensor data_key: {spec.data_key}")
            seen.add(spec.data_key)
        self._specs: Tuple[SensorSpec, ...] = specs

    def __iter__(self) -> Iterator[SensorSpec]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def keys(self) -> list[str]:
        return [s.data_key for s in self._specs]

    def find(self, data_key: str) -> SensorSpec:
        for spec in self._specs:
            if spec.data_key == data_key:
                return spec
        raise UnknownSensorError(data_key)
