"""Simple entrypoint to look up the weather from the command line."""

import asyncio
import sys

from orientall_app.app import OrientAllApp
from models.weather import CityQuery, CoordinatesQuery, LocationQuery, QueryResult


def _query_from_args(args: list[str]) -> LocationQuery:
    if len(args) == 2:
        try:
            return CoordinatesQuery(latitude=float(args[0]), longitude=float(args[1]))
        except ValueError:
            pass
    return CityQuery(city=" ".join(args))


def _render(result: QueryResult) -> str:
    if not result.ok:
        return result.error.user_message
    record = result.record
    lines = [
        f"{record.icon} {record.city}: {record.temperature_celsius:.0f}°C, {record.condition}",
        f"Humidity {record.humidity_percent}%, wind {record.wind_speed_kmh:.0f} km/h",
    ]
    lines.extend(f"Source: {source.title or source.uri}" for source in result.sources)
    return "\n".join(lines)


def main() -> None:
    if len(sys.argv) < 2:
        print("usage: python main.py <city> | <latitude> <longitude>")
        raise SystemExit(2)
    app = OrientAllApp()
    result = asyncio.run(app.weather_agent.fetch_weather(_query_from_args(sys.argv[1:])))
    print(_render(result))
    if not result.ok:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
