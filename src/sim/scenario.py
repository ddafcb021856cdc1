import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from src.core.errors import PlatformNotFoundError
from src.core.models import BookingKind, Conflict, Seconds, coerce_instant, format_clock
from src.core.station import Station

logger = logging.getLogger(__name__)

SCHEDULED = "scheduled"
CONFLICT = "conflict"
PLATFORM_NOT_FOUND = "platform_not_found"


@dataclass
class BookingRequest:
    platform_id: int
    kind: BookingKind
    at: Seconds


@dataclass
class BookingOutcome:
    platform_id: int
    kind: BookingKind
    at: Seconds
    status: str
    conflicting_at: Optional[Seconds] = None


@dataclass
class ScenarioReport:
    station: Station
    outcomes: List[BookingOutcome] = field(default_factory=list)
    aborted: bool = False


def load_scenario(path: Path) -> Dict[str, Any]:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def build_station(scenario: Dict[str, Any]) -> Station:
    station = Station(scenario["station_id"])
    for name in scenario.get("lines", []):
        station.add_line(name)
    for pid in scenario.get("platforms", []):
        station.add_platform(int(pid))
    return station


def parse_bookings(raw: Iterable[Dict[str, Any]]) -> List[BookingRequest]:
    return [
        BookingRequest(
            platform_id=int(b["platform"]),
            kind=BookingKind(b["kind"]),
            at=coerce_instant(b["at"]),
        )
        for b in raw
    ]


def run_bookings(station: Station, bookings: Iterable[BookingRequest], abort_on_missing: bool = True) -> ScenarioReport:
    # Conflicts are recorded and the batch continues; a missing platform is a caller bug
    report = ScenarioReport(station=station)
    for req in bookings:
        try:
            result = station.schedule(req.platform_id, req.kind, req.at)
        except PlatformNotFoundError as exc:
            report.outcomes.append(BookingOutcome(req.platform_id, req.kind, req.at, PLATFORM_NOT_FOUND))
            if abort_on_missing:
                logger.error("Aborting batch: %s", exc)
                report.aborted = True
                break
            logger.warning("Skipping booking: %s", exc)
            continue
        if isinstance(result, Conflict):
            report.outcomes.append(
                BookingOutcome(req.platform_id, req.kind, req.at, CONFLICT, conflicting_at=result.conflicting_at)
            )
        else:
            report.outcomes.append(BookingOutcome(req.platform_id, req.kind, req.at, SCHEDULED))
    return report


def run_scenario(scenario: Dict[str, Any], abort_on_missing: bool = True) -> ScenarioReport:
    station = build_station(scenario)
    return run_bookings(station, parse_bookings(scenario.get("bookings", [])), abort_on_missing=abort_on_missing)


def summarize_outcomes(outcomes: List[BookingOutcome]) -> Dict[str, int]:
    summary = {"total": len(outcomes), SCHEDULED: 0, CONFLICT: 0, PLATFORM_NOT_FOUND: 0}
    for o in outcomes:
        summary[o.status] += 1
    return summary


def render_outcome(outcome: BookingOutcome) -> str:
    what = "Stoppage" if outcome.kind is BookingKind.STOPPAGE else "Through train"
    if outcome.status == SCHEDULED:
        return f"{what} scheduled successfully."
    if outcome.status == CONFLICT:
        return (
            f"Conflict: Could not schedule {what.lower()} "
            f"(conflicts with {format_clock(outcome.conflicting_at)})."
        )
    return f"Platform {outcome.platform_id} not found."


def outcomes_json(outcomes: List[BookingOutcome]) -> List[Dict[str, Any]]:
    # One entry per booking request, clock times as text
    return [
        {
            "platform_id": o.platform_id,
            "kind": o.kind.value,
            "at": format_clock(o.at),
            "status": o.status,
            "conflicting_at": format_clock(o.conflicting_at) if o.conflicting_at is not None else None,
        }
        for o in outcomes
    ]
