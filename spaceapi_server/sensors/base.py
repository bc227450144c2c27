from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from ..domain.models import Sensors


class SensorTemplate(ABC):
    """Static data of one sensor plus the conversion of its stored value."""

    kind: ClassVar[str] = ""

    @abstractmethod
    def to_sensor(self, value: str, sensors: Sensors) -> None:
        """Parse ``value`` and append the resulting entry to ``sensors``.

        A value that cannot be parsed is logged and skipped.
        """
        ...
