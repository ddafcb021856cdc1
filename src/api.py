import logging
import threading
from typing import Any, Dict, List, Literal, Union

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response
from pydantic import BaseModel, Field, StrictInt, StrictStr

from src.core.config import StationConfig
from src.core.errors import (
    DuplicatePlatformError,
    InvalidInstantError,
    InvalidLineError,
    PlatformNotFoundError,
    SchedulingError,
)
from src.core.models import BookingKind, Conflict, TextStationId, coerce_instant, format_clock
from src.core.station import Station
from src.sim.scenario import load_scenario, outcomes_json, run_scenario, summarize_outcomes

logger = logging.getLogger(__name__)

app = FastAPI(title="Station Platform Scheduler API")

# Stations are independent; one lock serialises every mutation because sync
# handlers run on FastAPI's thread pool.
_STATIONS: Dict[str, Station] = {}
_LOCK = threading.Lock()

_STATUS_BY_ERROR = {
    PlatformNotFoundError: 404,
    DuplicatePlatformError: 409,
    InvalidLineError: 422,
    InvalidInstantError: 422,
}


class StationIn(BaseModel):
    # strict so that JSON true is not coerced into station 1
    station_id: Union[StrictInt, StrictStr]
    lines: List[str] = Field(default_factory=list)
    platforms: List[StrictInt] = Field(default_factory=list)


class LineIn(BaseModel):
    name: str


class PlatformIn(BaseModel):
    platform_id: StrictInt


class BookingIn(BaseModel):
    platform_id: StrictInt
    kind: BookingKind
    # "HH:MM[:SS]" or whole seconds since the start of the service day
    at: Union[StrictInt, StrictStr]


class StationOut(BaseModel):
    station_id: Union[int, str]
    id_kind: Literal["text", "integer"]
    lines: List[str]
    platforms: List[int]


def reset_stations() -> None:
    """Drop every registered station (used in tests)."""
    with _LOCK:
        _STATIONS.clear()


def _station_out(station: Station) -> Dict[str, Any]:
    return StationOut(
        station_id=station.id.value,
        id_kind="text" if isinstance(station.id, TextStationId) else "integer",
        lines=list(station.line_names),
        platforms=[p.id for p in station.platforms],
    ).model_dump()


def _get_station(key: str) -> Station:
    station = _STATIONS.get(key)
    if station is None:
        raise HTTPException(status_code=404, detail=f"Station {key} not found")
    return station


@app.exception_handler(SchedulingError)
async def scheduling_error_handler(request: Request, exc: SchedulingError) -> JSONResponse:
    status = _STATUS_BY_ERROR.get(type(exc), 400)
    return JSONResponse(status_code=status, content={"detail": str(exc)})


@app.get("/")
async def root() -> RedirectResponse:
    return RedirectResponse(url="/docs")


@app.get("/favicon.ico")
async def favicon() -> Response:
    return Response(status_code=204)


@app.post("/stations", status_code=201)
def create_station(body: StationIn) -> Dict[str, Any]:
    try:
        station = Station(body.station_id)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    # build fully before publishing so a bad body leaves the registry untouched
    for name in body.lines:
        station.add_line(name)
    for pid in body.platforms:
        station.add_platform(pid)
    key = str(station.id.value)
    with _LOCK:
        if key in _STATIONS:
            raise HTTPException(status_code=409, detail=f"Station {key} already exists")
        _STATIONS[key] = station
    logger.info("Registered %s", station.describe_id())
    return _station_out(station)


@app.get("/stations/{key}")
def get_station(key: str) -> Dict[str, Any]:
    with _LOCK:
        return _station_out(_get_station(key))


@app.post("/stations/{key}/lines")
def add_line(key: str, body: LineIn) -> Dict[str, Any]:
    with _LOCK:
        station = _get_station(key)
        station.add_line(body.name)
        return _station_out(station)


@app.post("/stations/{key}/platforms")
def add_platform(key: str, body: PlatformIn) -> Dict[str, Any]:
    with _LOCK:
        station = _get_station(key)
        station.add_platform(body.platform_id)
        return _station_out(station)


@app.post("/stations/{key}/bookings")
def book(key: str, body: BookingIn) -> Dict[str, Any]:
    at = coerce_instant(body.at)
    with _LOCK:
        result = _get_station(key).schedule(body.platform_id, body.kind, at)
    out: Dict[str, Any] = {
        "platform_id": body.platform_id,
        "kind": result.kind.value,
        "at": format_clock(result.at),
    }
    if isinstance(result, Conflict):
        logger.info("Station %s platform %s: %s at %s rejected", key, body.platform_id, result.kind.value, out["at"])
        return {**out, "status": "conflict", "conflicting_at": format_clock(result.conflicting_at)}
    return {**out, "status": "accepted"}


@app.get("/demo")
def demo() -> Dict[str, Any]:
    cfg = StationConfig()
    report = run_scenario(load_scenario(cfg.scenario_path), abort_on_missing=cfg.abort_on_missing_platform)
    return {
        "station": _station_out(report.station),
        "outcomes": outcomes_json(report.outcomes),
        "summary": summarize_outcomes(report.outcomes),
        "aborted": report.aborted,
    }
