"""Runtime settings (environment / .env) and logging setup."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

_ROOT = Path(__file__).parent.parent.parent

# Scene radii. Scene units, not physical distances.
EARTH_RADIUS = 5.0
MARKER_RADIUS = 5.02
SUN_RADIUS = 100.0
MOON_RADIUS = 40.0

DEFAULT_MATCH_TOLERANCE = 30.0  # Minutes


class ConfigError(ValueError):
    """Malformed environment setting."""


@dataclass(frozen=True)
class Settings:
    cities_path: Path
    match_tolerance_minutes: float
    log_level: str


def load_settings() -> Settings:
    """Read settings from the environment. Call ``load_dotenv()`` first.

    Raises:
        ConfigError: When a numeric setting is not a number or a level name is unknown.
    """
    cities_path = Path(
        os.environ.get(
            "SOLARGLOBE_CITIES_PATH", str(_ROOT / "resources" / "cities.json")
        )
    )

    raw_tolerance = os.environ.get("SOLARGLOBE_MATCH_TOLERANCE")
    if raw_tolerance is None:
        tolerance = DEFAULT_MATCH_TOLERANCE
    else:
        try:
            tolerance = float(raw_tolerance)
        except ValueError as e:
            raise ConfigError(
                f"SOLARGLOBE_MATCH_TOLERANCE must be a number: {raw_tolerance!r}"
            ) from e
        if not 0.0 <= tolerance <= 720.0:
            raise ConfigError(
                f"SOLARGLOBE_MATCH_TOLERANCE out of range [0, 720]: {tolerance}"
            )

    log_level = os.environ.get("SOLARGLOBE_LOG_LEVEL", "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"unknown SOLARGLOBE_LOG_LEVEL: {log_level!r}")

    return Settings(
        cities_path=cities_path,
        match_tolerance_minutes=tolerance,
        log_level=log_level,
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
