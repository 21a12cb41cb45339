"""Prompt template for grounded weather lookups."""

from __future__ import annotations

from typing import List

from models.weather import CityQuery, CoordinatesQuery, LocationQuery

REPLY_KEYS: List[str] = ["city", "temperature", "condition", "humidity", "windSpeed", "icon"]

REPLY_FIELD_BULLETS: List[str] = [
    '"city": string (e.g., "Mountain View")',
    '"temperature": number (in Celsius)',
    '"condition": string (e.g., "Clear", "Partly Cloudy", "Rain")',
    '"humidity": number (percentage, e.g., 65)',
    '"windSpeed": number (in km/h)',
    '"icon": string (a single emoji representing the weather, e.g., "☀️", "☁️", "🌧️")',
]


def describe_location(query: LocationQuery) -> str:
    """Render the location phrase embedded in the prompt."""

    if isinstance(query, CoordinatesQuery):
        return f"at latitude {query.latitude} and longitude {query.longitude}"
    if isinstance(query, CityQuery):
        return f'for the city "{query.city}"'
    raise TypeError(f"unsupported location query: {type(query).__name__}")


def build_weather_prompt(query: LocationQuery) -> str:
    """Compose the instruction sent to the search-grounded model."""

    field_text = "\n".join(f"- {bullet}" for bullet in REPLY_FIELD_BULLETS)
    return (
        f"Based on a Google Search for the current weather {describe_location(query)}, "
        "provide the following information in a single, valid JSON object, and nothing else.\n"
        "Do not add any explanation and do not wrap the JSON in code fences or markdown.\n"
        "If you cannot find the weather for the location, return a JSON object with an "
        'error message instead, for example: {"error": "Location not found"}.\n'
        f"The successful JSON object must have exactly these keys ({', '.join(REPLY_KEYS)}) "
        "with these value types:\n"
        f"{field_text}"
    )


__all__ = ["REPLY_KEYS", "build_weather_prompt", "describe_location"]
