import json

import pytest

from src.core.config import DEFAULT_SCENARIO_PATH, StationConfig
from src.main import EXIT_ABORTED, main


def test_main_prints_reference_run(capsys, monkeypatch):
    monkeypatch.delenv("STATION_SCENARIO_PATH", raising=False)
    assert main([]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Station ID (Integer): 1001"
    assert out[1:4] == ["Lines:", "- Blue Line", "- Yellow Line"]
    assert out[4] == "Stoppage scheduled successfully."
    assert out[6].startswith("Conflict: Could not schedule stoppage")


def test_main_aborts_on_missing_platform(tmp_path, capsys):
    path = tmp_path / "scn.json"
    path.write_text(json.dumps({
        "station_id": 7,
        "platforms": [1],
        "bookings": [
            {"platform": 2, "kind": "stoppage", "at": "10:00"},
            {"platform": 1, "kind": "stoppage", "at": "10:00"},
        ],
    }))
    assert main(["--scenario", str(path)]) == EXIT_ABORTED
    assert "Platform 2 not found." in capsys.readouterr().out
    assert main(["--scenario", str(path), "--continue-on-missing"]) == 0


def test_main_reports_bad_scenario(tmp_path):
    path = tmp_path / "dup.json"
    path.write_text(json.dumps({"station_id": 1, "platforms": [1, 1]}))
    assert main(["--scenario", str(path)]) == 1


def test_main_reports_missing_scenario_file(tmp_path):
    assert main(["--scenario", str(tmp_path / "nope.json")]) == 1


def test_main_reports_malformed_scenario_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{station_id: 1")
    assert main(["--scenario", str(path)]) == 1
    path.write_text("[1, 2]")
    assert main(["--scenario", str(path)]) == 1


def test_config_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("STATION_SCENARIO_PATH", str(tmp_path / "x.json"))
    monkeypatch.setenv("STATION_LOG_LEVEL", "debug")
    monkeypatch.setenv("STATION_ABORT_ON_MISSING_PLATFORM", "no")
    cfg = StationConfig()
    assert cfg.scenario_path == tmp_path / "x.json"
    assert cfg.log_level == "DEBUG"
    assert cfg.abort_on_missing_platform is False


def test_config_defaults(monkeypatch):
    for name in ("STATION_SCENARIO_PATH", "STATION_LOG_LEVEL", "STATION_ABORT_ON_MISSING_PLATFORM"):
        monkeypatch.delenv(name, raising=False)
    cfg = StationConfig()
    assert cfg.scenario_path == DEFAULT_SCENARIO_PATH
    assert cfg.abort_on_missing_platform is True


def test_config_rejects_bad_flag(monkeypatch):
    monkeypatch.setenv("STATION_ABORT_ON_MISSING_PLATFORM", "maybe")
    with pytest.raises(ValueError):
        StationConfig()
