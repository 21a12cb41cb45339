"""Weather query inputs, decoded records and query results."""

from __future__ import annotations

import math
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ErrorKind(str, Enum):
    """Classified failure of a weather query."""

    CONFIGURATION_ERROR = "ConfigurationError"
    EMPTY_RESPONSE = "EmptyResponse"
    MALFORMED_RESPONSE = "MalformedResponse"
    LOCATION_NOT_FOUND = "LocationNotFound"
    INCOMPLETE_DATA = "IncompleteData"
    INVALID_CREDENTIAL = "InvalidCredential"
    SERVICE_UNAVAILABLE = "ServiceUnavailable"
    UNKNOWN = "Unknown"


class CoordinatesQuery(BaseModel):
    """Look up the weather at a geographic position."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["coordinates"] = "coordinates"
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class CityQuery(BaseModel):
    """Look up the weather for a free-text city name."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["city"] = "city"
    city: str = Field(min_length=1)

    @field_validator("city", mode="before")
    @classmethod
    def _strip_city(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


LocationQuery = Annotated[Union[CoordinatesQuery, CityQuery], Field(discriminator="kind")]


class WeatherRecord(BaseModel):
    """Current conditions decoded from a model reply.

    Field aliases match the JSON keys the model is asked to produce, so
    ``model_dump(by_alias=True)`` yields the same shape the browser expects.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, allow_inf_nan=False)

    city: str = Field(min_length=1)
    temperature_celsius: float = Field(alias="temperature")
    condition: str
    humidity_percent: int = Field(alias="humidity", ge=0, le=100)
    wind_speed_kmh: float = Field(alias="windSpeed", ge=0)
    icon: str = Field(min_length=1)

    @field_validator("humidity_percent", mode="before")
    @classmethod
    def _round_humidity(cls, value: object) -> object:
        if isinstance(value, float) and math.isfinite(value):
            return round(value)
        return value

    @field_validator("city", "condition", "icon", mode="before")
    @classmethod
    def _strip_text(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class Source(BaseModel):
    """A web page the model cited for its answer."""

    model_config = ConfigDict(frozen=True)

    uri: str = Field(min_length=1)
    title: str = ""


class QueryError(BaseModel):
    """Classified failure with the raw detail kept for logs."""

    kind: ErrorKind
    message: str = ""

    @property
    def user_message(self) -> str:
        from logic.errors import user_message_for

        return user_message_for(self.kind)


class QueryResult(BaseModel):
    """Either a complete weather record with its sources, or an error."""

    status: Literal["ok", "error"]
    record: Optional[WeatherRecord] = None
    sources: List[Source] = Field(default_factory=list)
    error: Optional[QueryError] = None

    @model_validator(mode="after")
    def _check_variant(self) -> "QueryResult":
        if self.status == "ok" and (self.record is None or self.error is not None):
            raise ValueError("an ok result needs a record and no error")
        if self.status == "error" and (self.error is None or self.record is not None or self.sources):
            raise ValueError("an error result needs an error and nothing else")
        return self

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @classmethod
    def success(cls, record: WeatherRecord, sources: List[Source] | None = None) -> "QueryResult":
        return cls(status="ok", record=record, sources=list(sources or []))

    @classmethod
    def failure(cls, kind: ErrorKind, message: str = "") -> "QueryResult":
        return cls(status="error", error=QueryError(kind=kind, message=message))


__all__ = [
    "CityQuery",
    "CoordinatesQuery",
    "ErrorKind",
    "LocationQuery",
    "QueryError",
    "QueryResult",
    "Source",
    "WeatherRecord",
]
