import json
from pathlib import Path

from src.core.models import BookingKind, clock
from src.sim.scenario import (
    CONFLICT,
    PLATFORM_NOT_FOUND,
    SCHEDULED,
    build_station,
    load_scenario,
    outcomes_json,
    parse_bookings,
    render_outcome,
    run_bookings,
    run_scenario,
    summarize_outcomes,
)

DATA_DIR = Path(__file__).parents[1] / "src" / "data"


def test_sample_scenario_matches_reference_run():
    report = run_scenario(load_scenario(DATA_DIR / "sample_station.json"))
    assert not report.aborted
    assert [o.status for o in report.outcomes] == [SCHEDULED, SCHEDULED, CONFLICT, SCHEDULED]
    assert [render_outcome(o) for o in report.outcomes] == [
        "Stoppage scheduled successfully.",
        "Through train scheduled successfully.",
        "Conflict: Could not schedule stoppage (conflicts with 10:00).",
        "Through train scheduled successfully.",
    ]
    assert summarize_outcomes(report.outcomes) == {"total": 4, SCHEDULED: 3, CONFLICT: 1, PLATFORM_NOT_FOUND: 0}


def _scenario(bookings):
    return {"station_id": "NDLS", "lines": ["Red"], "platforms": [1, 2], "bookings": bookings}


def test_missing_platform_aborts_batch_by_default():
    report = run_scenario(_scenario([
        {"platform": 1, "kind": "stoppage", "at": "10:00"},
        {"platform": 3, "kind": "stoppage", "at": "10:00"},
        {"platform": 2, "kind": "through", "at": "10:00"},
    ]))
    assert report.aborted
    assert [o.status for o in report.outcomes] == [SCHEDULED, PLATFORM_NOT_FOUND]
    assert render_outcome(report.outcomes[-1]) == "Platform 3 not found."
    assert report.station.platform(2).timeline(BookingKind.THROUGH) == ()


def test_missing_platform_can_be_skipped():
    report = run_scenario(_scenario([
        {"platform": 3, "kind": "stoppage", "at": "10:00"},
        {"platform": 2, "kind": "through", "at": 36000},
    ]), abort_on_missing=False)
    assert not report.aborted
    assert [o.status for o in report.outcomes] == [PLATFORM_NOT_FOUND, SCHEDULED]


def test_build_station_and_parse_bookings():
    st = build_station(_scenario([]))
    assert st.describe_id() == "Station ID (String): NDLS"
    assert st.line_names == ("Red",)
    reqs = parse_bookings([{"platform": "2", "kind": "through", "at": "09:10"}])
    assert reqs[0].platform_id == 2 and reqs[0].kind is BookingKind.THROUGH and reqs[0].at == clock(9, 10)


def test_outcomes_json_uses_clock_text():
    st = build_station(_scenario([]))
    report = run_bookings(st, parse_bookings([
        {"platform": 1, "kind": "stoppage", "at": "12:00"},
        {"platform": 1, "kind": "stoppage", "at": "12:29:59"},
    ]))
    data = outcomes_json(report.outcomes)
    assert data[0] == {"platform_id": 1, "kind": "stoppage", "at": "12:00", "status": SCHEDULED, "conflicting_at": None}
    assert data[1]["conflicting_at"] == "12:00"
    json.dumps(data)
