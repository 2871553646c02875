"""Scenario file parsing.

A scenario file looks like::

    #SEED: 0.8203497538343072
    SAT0,-33.13,-145.94,367.35
    SAT1,73.73,70.57,658.49
    ROUTE,-6.40,-123.92,40.85,-34.45

Satellite altitudes are kilometers above the surface. The ROUTE line gives the
latitude and longitude of the two ground terminals, which become the START
and GOAL nodes.
"""

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..constants import EARTH_RADIUS_KM, ENDPOINT_ALTITUDE_KM, GOAL, START
from ..errors import InputError, ScenarioFileNotFoundError, ScenarioParseError
from ..models.point import Point3D

SEED_PREFIX = "#SEED:"
ROUTE_TAG = "ROUTE"


@dataclass(frozen=True)
class Scenario:
    seed: Optional[str]
    satellites: dict[str, Point3D]
    start: Point3D
    goal: Point3D
    radius: float = EARTH_RADIUS_KM
    source: Optional[str] = field(default=None, compare=False)

    def positions(self) -> dict[str, Point3D]:
        """All node positions, satellites plus START and GOAL."""
        positions = dict(self.satellites)
        positions[START] = self.start
        positions[GOAL] = self.goal
        return positions


def _parse_float(value: str, name: str, line_number: int, line: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise ScenarioParseError(line_number, line, f"{name} '{value}' is not a number")

    if not math.isfinite(number):
        raise ScenarioParseError(line_number, line, f"{name} must be finite")

    return number


def _parse_lat_lon(
    lat_value: str, lon_value: str, line_number: int, line: str
) -> tuple[float, float]:
    latitude = _parse_float(lat_value, "latitude", line_number, line)
    longitude = _parse_float(lon_value, "longitude", line_number, line)

    if not (-90 <= latitude <= 90):
        raise ScenarioParseError(
            line_number, line, f"latitude {latitude} outside [-90, 90]"
        )
    if not (-180 <= longitude <= 180):
        raise ScenarioParseError(
            line_number, line, f"longitude {longitude} outside [-180, 180]"
        )

    return latitude, longitude


def parse_scenario(
    text: str, radius: float = EARTH_RADIUS_KM, source: Optional[str] = None
) -> Scenario:
    """Parse scenario text into satellite and endpoint positions.

    Args:
        text: Scenario file contents
        radius: Sphere radius used to project coordinates
        source: Optional description of where the text came from

    Returns:
        Scenario with projected positions

    Raises:
        ScenarioParseError: If a line is malformed
        InputError: If the ROUTE line is missing or repeated
    """
    seed: Optional[str] = None
    satellites: dict[str, Point3D] = {}
    route: Optional[tuple[Point3D, Point3D]] = None

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()

        if not line:
            continue
        if line.startswith("#"):
            if line.upper().startswith(SEED_PREFIX) and seed is None:
                seed = line[len(SEED_PREFIX) :].strip()
            continue

        values = [value.strip() for value in line.split(",")]

        if values[0] == ROUTE_TAG:
            if len(values) != 5:
                raise ScenarioParseError(
                    line_number, line, f"route needs 5 fields, got {len(values)}"
                )
            if route is not None:
                raise ScenarioParseError(line_number, line, "duplicate ROUTE line")

            start_lat, start_lon = _parse_lat_lon(
                values[1], values[2], line_number, line
            )
            goal_lat, goal_lon = _parse_lat_lon(values[3], values[4], line_number, line)

            route = (
                Point3D.from_spherical(
                    start_lat, start_lon, radius, ENDPOINT_ALTITUDE_KM
                ),
                Point3D.from_spherical(goal_lat, goal_lon, radius, ENDPOINT_ALTITUDE_KM),
            )
            continue

        if len(values) != 4:
            raise ScenarioParseError(
                line_number, line, f"satellite needs 4 fields, got {len(values)}"
            )

        sat_id = values[0]
        if not sat_id:
            raise ScenarioParseError(line_number, line, "empty satellite identifier")
        if sat_id in (START, GOAL):
            raise ScenarioParseError(
                line_number, line, f"'{sat_id}' is reserved for route endpoints"
            )
        if sat_id in satellites:
            raise ScenarioParseError(
                line_number, line, f"duplicate satellite identifier '{sat_id}'"
            )

        latitude, longitude = _parse_lat_lon(values[1], values[2], line_number, line)
        altitude = _parse_float(values[3], "altitude", line_number, line)
        if altitude < 0:
            raise ScenarioParseError(
                line_number, line, f"altitude {altitude} is below the surface"
            )

        satellites[sat_id] = Point3D.from_spherical(
            latitude, longitude, radius, altitude
        )

    if route is None:
        raise InputError(
            "Scenario has no ROUTE line",
            suggestions=["Add a line 'ROUTE,lat1,lon1,lat2,lon2' for the endpoints"],
        )

    return Scenario(
        seed=seed,
        satellites=satellites,
        start=route[0],
        goal=route[1],
        radius=radius,
        source=source,
    )


def load_scenario(path: str | Path, radius: float = EARTH_RADIUS_KM) -> Scenario:
    """Read and parse a scenario file.

    Raises:
        ScenarioFileNotFoundError: If the file does not exist
        InputError: If the file cannot be read or is not valid UTF-8
    """
    scenario_path = Path(path)

    try:
        text = scenario_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ScenarioFileNotFoundError(str(scenario_path)) from None
    except IsADirectoryError:
        raise InputError(f"Scenario path is a directory: '{scenario_path}'") from None
    except UnicodeDecodeError as e:
        raise InputError(
            f"Scenario file '{scenario_path}' is not valid UTF-8 (byte {e.start})",
            suggestions=["Scenario files are plain text with comma separated fields"],
        ) from None
    except OSError as e:
        raise InputError(
            f"Cannot read scenario file '{scenario_path}': {e.strerror or e}"
        ) from None

    return parse_scenario(text, radius=radius, source=str(scenario_path))
