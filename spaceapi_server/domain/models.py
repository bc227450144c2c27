from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticSerializationError

from .errors import SerializationFault


class Location(BaseModel):
    model_config = ConfigDict(extra="allow")

    address: Optional[str] = None
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class Contact(BaseModel):
    model_config = ConfigDict(extra="allow")

    phone: Optional[str] = None
    sip: Optional[str] = None
    irc: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    email: Optional[str] = None
    ml: Optional[str] = None
    jabber: Optional[str] = None
    issue_mail: Optional[str] = None


class State(BaseModel):
    model_config = ConfigDict(extra="allow")

    open: Optional[bool] = None
    lastchange: Optional[int] = None
    trigger_person: Optional[str] = None
    message: Optional[str] = None


class TemperatureSensor(BaseModel):
    value: float
    unit: str
    location: str
    name: Optional[str] = None
    description: Optional[str] = None


class PeopleNowPresentSensor(BaseModel):
    value: int = Field(ge=0)
    location: Optional[str] = None
    name: Optional[str] = None
    names: Optional[List[str]] = None
    description: Optional[str] = None


class Sensors(BaseModel):
    people_now_present: List[PeopleNowPresentSensor] = Field(default_factory=list)
    temperature: List[TemperatureSensor] = Field(default_factory=list)


class StatusDocument(BaseModel):
    """SpaceAPI status document.

    Only the fields the server touches are typed; any other key in the
    static template is kept as-is.
    """

    model_config = ConfigDict(extra="allow")

    api: str = "0.13"
    space: str
    logo: str
    url: str
    location: Location
    contact: Contact
    issue_report_channels: List[str]
    state: Optional[State] = None
    sensors: Optional[Sensors] = None

    @field_validator("issue_report_channels")
    @classmethod
    def _channels_not_empty(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("at least one issue report channel is required")
        return v

    def to_json(self) -> str:
        try:
            return self.model_dump_json(exclude_none=True)
        except PydanticSerializationError as e:
            raise SerializationFault(f"Status document could not be serialized to JSON: {e}") from e
