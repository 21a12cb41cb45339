"""FastAPI server exposing the weather proxy and orientation endpoints."""

import logging
import os
from typing import Optional

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from orientall_app.app import OrientAllApp
from orientall_app.logging_config import configure_logging, get_logger, log_event
from logic.errors import user_message_for
from models.weather import CityQuery, CoordinatesQuery, ErrorKind, LocationQuery, QueryResult

LOGGER = get_logger(__name__)
_CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


class OrientationRequest(BaseModel):
    """Orientation reading as reported by the browser."""

    type: Optional[str] = Field(None, description="screen.orientation.type, when available")
    angle: Optional[float] = Field(None, description="Rotation angle in degrees")


def _location_query(
    lat: Optional[float], lon: Optional[float], city: Optional[str]
) -> Optional[LocationQuery]:
    if lat is not None and lon is not None:
        return CoordinatesQuery(latitude=lat, longitude=lon)
    if city and city.strip():
        return CityQuery(city=city)
    return None


def _error_response(kind: ErrorKind) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": user_message_for(kind), "kind": kind.value},
        headers=_CORS_HEADERS,
    )


def _weather_response(result: QueryResult) -> JSONResponse:
    if result.ok:
        content = {
            "weatherData": result.record.model_dump(by_alias=True),
            "sources": [source.model_dump() for source in result.sources],
        }
        return JSONResponse(status_code=200, content=content, headers=_CORS_HEADERS)

    # Location-not-found stays a 200 with the model's error nested in weatherData.
    if result.error.kind is ErrorKind.LOCATION_NOT_FOUND:
        content = {"weatherData": {"error": result.error.message}, "sources": []}
        return JSONResponse(status_code=200, content=content, headers=_CORS_HEADERS)

    return _error_response(result.error.kind)


def create_app(orientall: OrientAllApp | None = None) -> FastAPI:
    """Build the FastAPI instance around an :class:`OrientAllApp`."""

    orientall = orientall or OrientAllApp()
    api = FastAPI(title="OrientAll", version="0.1.0")

    @api.get("/healthz")
    async def healthcheck() -> dict:
        """Lightweight readiness probe."""

        return {
            "status": "ok",
            "service": "orientall",
            "environment": orientall.config.environment or "local",
            "model": orientall.config.model,
            "weather_configured": orientall.config.is_configured,
        }

    @api.get("/weather")
    async def weather(
        lat: Optional[float] = Query(None, ge=-90, le=90),
        lon: Optional[float] = Query(None, ge=-180, le=180),
        city: Optional[str] = Query(None),
    ) -> JSONResponse:
        """Proxy a location query to the grounded model."""

        query = _location_query(lat, lon, city)
        if query is None:
            return JSONResponse(
                status_code=400, content={"error": "Missing location parameters"}, headers=_CORS_HEADERS
            )

        try:
            result = await orientall.weather_agent.fetch_weather(query)
            return _weather_response(result)
        except Exception:
            log_event(LOGGER, logging.ERROR, "weather_request_failed", query_kind=query.kind, exc_info=True)
            return _error_response(ErrorKind.UNKNOWN)

    @api.post("/orientation")
    async def orientation(request: OrientationRequest) -> dict:
        """Classify an orientation reading and name the tool to show."""

        return orientall.describe_orientation(request.model_dump(exclude_none=True))

    return api


configure_logging()
app = create_app()


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


def server_port() -> int:
    """Port to listen on; hosting platforms pass it in ``PORT``."""

    return int(os.getenv("PORT", "8080"))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=server_port(), reload=False)
