"""Decode freeform model replies into weather records.

The model is asked for a bare JSON object but sometimes wraps it in a
markdown code fence. Decoding is two sequential attempts: the raw text, then
the text with the fences removed. There is no third attempt.
"""

from __future__ import annotations

import json
import math
import re
from numbers import Real
from typing import Any, Iterable, List, Tuple

from pydantic import ValidationError

from models.weather import ErrorKind, QueryResult, Source, WeatherRecord

_LEADING_FENCE = re.compile(r"^\s*```[A-Za-z0-9_+\-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```\s*$")


class ReplyDecodeError(ValueError):
    """Raised when a reply is not JSON even after fence removal."""


def strip_code_fences(text: str) -> str:
    """Remove a leading and trailing code fence and surrounding whitespace."""

    cleaned = _LEADING_FENCE.sub("", text, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def decode_reply(text: str) -> Any:
    """Parse ``text`` as JSON, retrying once without code fences."""

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ReplyDecodeError(f"reply is not valid JSON: {exc.msg}") from exc


def collect_sources(citations: Iterable[Tuple[str, str]]) -> List[Source]:
    """Turn ``(uri, title)`` pairs into sources, dropping blanks and repeats."""

    sources: List[Source] = []
    seen = set()
    for uri, title in citations:
        if not uri or uri in seen:
            continue
        seen.add(uri)
        sources.append(Source(uri=uri, title=title or ""))
    return sources


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def parse_weather_reply(text: str | None, citations: Iterable[Tuple[str, str]] = ()) -> QueryResult:
    """Convert a raw model reply into a weather result or a classified error."""

    if not text or not text.strip():
        return QueryResult.failure(ErrorKind.EMPTY_RESPONSE, "model returned no text")

    try:
        payload = decode_reply(text)
    except ReplyDecodeError as exc:
        return QueryResult.failure(ErrorKind.MALFORMED_RESPONSE, str(exc))

    if not isinstance(payload, dict):
        return QueryResult.failure(
            ErrorKind.MALFORMED_RESPONSE, f"expected a JSON object, got {type(payload).__name__}"
        )

    if payload.get("error"):
        return QueryResult.failure(ErrorKind.LOCATION_NOT_FOUND, str(payload["error"]))

    city = payload.get("city")
    if not isinstance(city, str) or not city.strip():
        return QueryResult.failure(ErrorKind.INCOMPLETE_DATA, "city is missing")
    if not _is_number(payload.get("temperature")):
        return QueryResult.failure(ErrorKind.INCOMPLETE_DATA, "temperature is missing or not a finite number")

    try:
        record = WeatherRecord.model_validate(payload)
    except ValidationError as exc:
        fields = sorted({".".join(str(part) for part in error["loc"]) for error in exc.errors()})
        return QueryResult.failure(ErrorKind.INCOMPLETE_DATA, f"invalid fields: {', '.join(fields)}")

    return QueryResult.success(record, collect_sources(citations))


__all__ = [
    "ReplyDecodeError",
    "collect_sources",
    "decode_reply",
    "parse_weather_reply",
    "strip_code_fences",
]
