"""Tests for sensor templates and the sensor registry."""

import pytest
from pydantic import ValidationError

from spaceapi_server.domain.errors import ConfigurationError, UnknownSensorError
from spaceapi_server.domain.models import Sensors
from spaceapi_server.domain.registry import SensorRegistry, SensorSpec
from spaceapi_server.sensors.templates import (
    PeopleNowPresentSensorTemplate,
    TemperatureSensorTemplate,
)


class TestTemperatureSensorTemplate:

    def test_appends_parsed_value(self) -> None:
        sensors = Sensors()
        TemperatureSensorTemplate(unit="°C", location="Room", name="Ceiling").to_sensor("21.5", sensors)
        assert len(sensors.temperature) == 1
        entry = sensors.temperature[0]
        assert entry.value == 21.5
        assert entry.unit == "°C"
        assert entry.location == "Room"
        assert entry.name == "Ceiling"
        assert sensors.people_now_present == []

    @pytest.mark.parametrize("raw", ["warm", "", "nan", "inf", "1e999", "21.5 ", " 21.5", "2_1", "21,5", "\u0662\u0661"])
    def test_unparseable_value_is_skipped(self, raw: str) -> None:
        sensors = Sensors()
        TemperatureSensorTemplate(unit="°C", location="Room").to_sensor(raw, sensors)
        assert sensors.temperature == []

    def test_signed_and_exponent_notation_accepted(self) -> None:
        sensors = Sensors()
        template = TemperatureSensorTemplate(unit="°C", location="Room")
        for raw in ("+21.5", "-3", ".5", "2e1"):
            template.to_sensor(raw, sensors)
        assert [t.value for t in sensors.temperature] == [21.5, -3.0, 0.5, 20.0]

    def test_field_types_are_checked(self) -> None:
        with pytest.raises(ValidationError):
            TemperatureSensorTemplate(unit=5, location="Room")


class TestPeopleNowPresentSensorTemplate:

    def test_appends_count(self) -> None:
        sensors = Sensors()
        template = PeopleNowPresentSensorTemplate(location="Hackerspace", names=("alice", "bob"))
        template.to_sensor("2", sensors)
        assert sensors.people_now_present[0].value == 2
        assert sensors.people_now_present[0].names == ["alice", "bob"]
        assert sensors.temperature == []

    @pytest.mark.parametrize("raw", ["-1", "2.5", "many", "1_000", " 3 ", "3\n", "", "\u0663"])
    def test_invalid_count_is_skipped(self, raw: str) -> None:
        sensors = Sensors()
        PeopleNowPresentSensorTemplate().to_sensor(raw, sensors)
        assert sensors.people_now_present == []

    def test_leading_plus_accepted(self) -> None:
        sensors = Sensors()
        PeopleNowPresentSensorTemplate().to_sensor("+3", sensors)
        assert sensors.people_now_present[0].value == 3

    def test_names_must_be_a_list_of_strings(self) -> None:
        with pytest.raises(ValidationError):
            PeopleNowPresentSensorTemplate(names="alice")

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PeopleNowPresentSensorTemplate(colour="red")


class TestSensorRegistry:

    def _spec(self, key: str) -> SensorSpec:
        return SensorSpec(template=TemperatureSensorTemplate(unit="°C", location=key), data_key=key)

    def test_keeps_registration_order(self) -> None:
        registry = SensorRegistry([self._spec("b"), self._spec("a"), self._spec("c")])
        assert registry.keys() == ["b", "a", "c"]
        assert [s.data_key for s in registry] == ["b", "a", "c"]
        assert len(registry) == 3

    def test_find_by_exact_key(self) -> None:
        registry = SensorRegistry([self._spec("temp_room"), self._spec("temp_outside")])
        assert registry.find("temp_outside").data_key == "temp_outside"

    def test_find_unknown_raises(self) -> None:
        registry = SensorRegistry([self._spec("temp_room")])
        with pytest.raises(UnknownSensorError) as exc_info:
            registry.find("TEMP_ROOM")
        assert exc_info.value.sensor == "TEMP_ROOM"
        assert exc_info.value.reason == "Unknown sensor: TEMP_ROOM"

    def test_duplicate_key_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            SensorRegistry([self._spec("temp_room"), self._spec("temp_room")])

    def test_empty_key_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            SensorRegistry([self._spec("")])

    def test_empty_registry(self) -> None:
        registry = SensorRegistry()
        assert len(registry) == 0
        assert registry.keys() == []
