"""Model package exports."""

from models.orientation import (
    LegacyOrientationReading,
    OrientationMode,
    OrientationReading,
    ScreenOrientationReading,
    ToolView,
)
from models.weather import (
    CityQuery,
    CoordinatesQuery,
    ErrorKind,
    LocationQuery,
    QueryError,
    QueryResult,
    Source,
    WeatherRecord,
)

__all__ = [
    "CityQuery",
    "CoordinatesQuery",
    "ErrorKind",
    "LegacyOrientationReading",
    "LocationQuery",
    "OrientationMode",
    "OrientationReading",
    "QueryError",
    "QueryResult",
    "ScreenOrientationReading",
    "Source",
    "ToolView",
    "WeatherRecord",
]
