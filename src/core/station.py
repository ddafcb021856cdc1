import logging
from typing import Dict, List, Tuple, Union

from src.core.errors import DuplicatePlatformError, PlatformNotFoundError
from src.core.models import (
    BookingKind,
    BookingResult,
    Conflict,
    IntStationId,
    Line,
    Seconds,
    StationId,
    TextStationId,
    format_clock,
    station_id_of,
)
from src.core.platform import Platform

logger = logging.getLogger(__name__)


class Station:
    """A station: fixed identity, a catalogue of lines and its platforms.

    Booking requests are routed to the platform with the matching id. The
    station assumes exclusive access; callers sharing one across threads must
    serialise ``add_line``, ``add_platform`` and ``schedule`` themselves.
    """

    def __init__(self, station_id: Union[str, int, TextStationId, IntStationId]) -> None:
        self._id: StationId = station_id_of(station_id)
        self._lines: List[Line] = []
        self._platforms: List[Platform] = []
        # index over _platforms; ids are unique so it never disagrees with a scan
        self._platform_index: Dict[int, Platform] = {}

    @property
    def id(self) -> StationId:
        return self._id

    @property
    def lines(self) -> Tuple[Line, ...]:
        return tuple(self._lines)

    @property
    def line_names(self) -> Tuple[str, ...]:
        return tuple(line.name for line in self._lines)

    @property
    def platforms(self) -> Tuple[Platform, ...]:
        return tuple(self._platforms)

    def add_line(self, name: str) -> Line:
        line = Line(name)
        self._lines.append(line)
        return line

    def add_platform(self, platform_id: int) -> Platform:
        platform = Platform(platform_id)
        if platform_id in self._platform_index:
            raise DuplicatePlatformError(platform_id)
        self._platforms.append(platform)
        self._platform_index[platform_id] = platform
        return platform

    def platform(self, platform_id: int) -> Platform:
        # True and 1.0 hash like 1 but are never platform ids
        if isinstance(platform_id, bool) or not isinstance(platform_id, int):
            raise PlatformNotFoundError(platform_id)
        try:
            return self._platform_index[platform_id]
        except KeyError:
            raise PlatformNotFoundError(platform_id) from None

    def schedule(self, platform_id: int, kind: BookingKind, t: Seconds) -> BookingResult:
        return self.platform(platform_id).try_book(kind, t)

    def schedule_stoppage(self, platform_id: int, t: Seconds) -> bool:
        return self._schedule_and_report(platform_id, BookingKind.STOPPAGE, t)

    def schedule_through(self, platform_id: int, t: Seconds) -> bool:
        return self._schedule_and_report(platform_id, BookingKind.THROUGH, t)

    def _schedule_and_report(self, platform_id: int, kind: BookingKind, t: Seconds) -> bool:
        result = self.schedule(platform_id, kind, t)
        if isinstance(result, Conflict):
            what = "Stoppage" if kind is BookingKind.STOPPAGE else "Through train"
            logger.warning(
                "%s time %s on platform %s conflicts with an existing %s at %s",
                what, format_clock(t), platform_id, kind.value, format_clock(result.conflicting_at),
            )
            return False
        return True

    def describe_id(self) -> str:
        return f"Station ID ({self._id.label}): {self._id.value}"

    def describe_lines(self) -> str:
        return "\n".join(["Lines:"] + [f"- {line.name}" for line in self._lines])

    def __repr__(self) -> str:
        return f"Station(id={self._id.value!r}, lines={len(self._lines)}, platforms={len(self._platforms)})"
