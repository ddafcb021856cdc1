from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from dotenv import load_dotenv

# Load .env early (no error if missing)
load_dotenv()

DEFAULT_SCENARIO_PATH = Path(__file__).parents[1] / "data" / "sample_station.json"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


@dataclass(frozen=True)
class StationConfig:
    # Scenario played by the reference driver and the /demo endpoint
    scenario_path: Path = field(
        default_factory=lambda: Path(os.getenv("STATION_SCENARIO_PATH") or DEFAULT_SCENARIO_PATH)
    )
    log_level: str = field(default_factory=lambda: os.getenv("STATION_LOG_LEVEL", "INFO").upper())
    # Reference policy: an unknown platform aborts the rest of the batch
    abort_on_missing_platform: bool = field(
        default_factory=lambda: _env_flag("STATION_ABORT_ON_MISSING_PLATFORM", True)
    )
