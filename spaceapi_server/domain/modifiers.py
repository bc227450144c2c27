from __future__ import annotations

from abc import ABC, abstractmethod

from .models import State, StatusDocument


class StatusModifier(ABC):
    """Full-document transformation run after sensors are filled in."""

    @abstractmethod
    def modify(self, status: StatusDocument) -> None:
        ...


class StateFromPeopleNowPresent(StatusModifier):
    """Derive ``state.open`` and ``state.message`` from the first people-now-present sensor."""

    def modify(self, status: StatusDocument) -> None:
        if status.sensors is None or not status.sensors.people_now_present:
            return
        count = status.sensors.people_now_present[0].value

        if status.state is None:
            status.state = State()
        status.state.open = count > 0
        if count == 1:
            status.state.message = f"{count} person here right now"
        elif count > 1:
            status.state.message = f"{count} people here right now"


MODIFIER_NAMES = {
    "state_from_people_now_present": StateFromPeopleNowPresent,
}
