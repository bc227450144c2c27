from __future__ import annotations

import logging
import math
import re
from typing import Optional, Tuple

from pydantic import ConfigDict
from pydantic.dataclasses import dataclass

from ..domain.models import PeopleNowPresentSensor, Sensors, TemperatureSensor
from .base import SensorTemplate

logger = logging.getLogger(__name__)

# Plain decimal notation only: no surrounding whitespace, no digit separators.
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_COUNT_RE = re.compile(r"\+?[0-9]+")

# Field types are checked on construction, a bad registration fails at startup
_TEMPLATE_CONFIG = ConfigDict(extra="forbid")


@dataclass(frozen=True, config=_TEMPLATE_CONFIG)
class TemperatureSensorTemplate(SensorTemplate):
    unit: str
    location: str
    name: Optional[str] = None
    description: Optional[str] = None

    kind = "temperature"

    def to_sensor(self, value: str, sensors: Sensors) -> None:
        if not _FLOAT_RE.fullmatch(value):
            logger.error("Temperature sensor could not parse value %r", value)
            return
        reading = float(value)
        if not math.isfinite(reading):
            logger.error("Temperature sensor got out-of-range value %r", value)
            return

        sensors.temperature.append(
            TemperatureSensor(
                value=reading,
                unit=self.unit,
                location=self.location,
                name=self.name,
                description=self.description,
            )
        )


@dataclass(frozen=True, config=_TEMPLATE_CONFIG)
class PeopleNowPresentSensorTemplate(SensorTemplate):
    location: Optional[str] = None
    name: Optional[str] = None
    names: Optional[Tuple[str, ...]] = None
    description: Optional[str] = None

    kind = "people_now_present"

    def to_sensor(self, value: str, sensors: Sensors) -> None:
        if not _COUNT_RE.fullmatch(value):
            logger.error("People now present sensor could not parse value %r", value)
            return

        sensors.people_now_present.append(
            PeopleNowPresentSensor(
                value=int(value),
                location=self.location,
                name=self.name,
                names=list(self.names) if self.names is not None else None,
                description=self.description,
            )
        )


TEMPLATE_KINDS = {
    TemperatureSensorTemplate.kind: TemperatureSensorTemplate,
    PeopleNowPresentSensorTemplate.kind: PeopleNowPresentSensorTemplate,
}
