import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from src.core.config import StationConfig
from src.core.errors import SchedulingError
from src.sim.scenario import load_scenario, render_outcome, run_scenario, summarize_outcomes

logger = logging.getLogger(__name__)

EXIT_ABORTED = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Play a batch of platform bookings against one station")
    p.add_argument("--scenario", type=Path, default=None, help="Scenario JSON file (defaults to the bundled sample)")
    p.add_argument("--continue-on-missing", action="store_true", help="Keep going when a booking names an unknown platform")
    p.add_argument("--log-level", default=None, help="Logging level (default from STATION_LOG_LEVEL)")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    cfg = StationConfig()
    logging.basicConfig(level=(args.log_level or cfg.log_level).upper(), format="%(levelname)s %(name)s: %(message)s")

    abort = cfg.abort_on_missing_platform and not args.continue_on_missing
    try:
        scenario = load_scenario(args.scenario or cfg.scenario_path)
        report = run_scenario(scenario, abort_on_missing=abort)
    except (OSError, json.JSONDecodeError, SchedulingError, KeyError, TypeError, ValueError) as exc:
        logger.error("Scenario could not be set up: %s", exc)
        return 1

    print(report.station.describe_id())
    print(report.station.describe_lines())
    for outcome in report.outcomes:
        print(render_outcome(outcome))
    print("Summary:", summarize_outcomes(report.outcomes))
    return EXIT_ABORTED if report.aborted else 0


if __name__ == "__main__":
    sys.exit(main())
