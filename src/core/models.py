import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

from src.core.errors import InvalidInstantError, InvalidLineError

Seconds = int  # seconds since the start of the service day

SECONDS_PER_MINUTE = 60

# ASCII digits only
_CLOCK_RE = re.compile(r"(\d+):(\d{2})(?::(\d{2}))?", re.ASCII)


class BookingKind(str, Enum):
    STOPPAGE = "stoppage"  # train halts at the platform
    THROUGH = "through"  # train passes without halting


@dataclass(frozen=True)
class TextStationId:
    value: str

    @property
    def label(self) -> str:
        return "String"


@dataclass(frozen=True)
class IntStationId:
    value: int

    @property
    def label(self) -> str:
        return "Integer"


StationId = Union[TextStationId, IntStationId]


def station_id_of(raw: Union[str, int, TextStationId, IntStationId]) -> StationId:
    """Wrap a raw identity value into its variant.

    ``bool`` is rejected even though it is an ``int`` subclass, and text tags
    must not be blank.
    """
    if isinstance(raw, (TextStationId, IntStationId)):
        return raw
    if isinstance(raw, bool):
        raise ValueError("Station id must be text or an integer, not a bool")
    if isinstance(raw, int):
        return IntStationId(raw)
    if isinstance(raw, str):
        if not raw.strip():
            raise ValueError("Station id text must not be empty")
        return TextStationId(raw)
    raise ValueError(f"Unsupported station id type: {type(raw).__name__}")


@dataclass(frozen=True)
class Line:
    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidLineError("Line name must be non-empty text")


@dataclass(frozen=True)
class Accepted:
    kind: BookingKind
    at: Seconds

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class Conflict:
    kind: BookingKind
    at: Seconds
    # first earlier booking of the same kind found within the gap
    conflicting_at: Seconds

    @property
    def accepted(self) -> bool:
        return False


BookingResult = Union[Accepted, Conflict]


def ensure_instant(t: Seconds) -> Seconds:
    # bool is an int subclass but never a meaningful instant
    if isinstance(t, bool) or not isinstance(t, int):
        raise InvalidInstantError(f"Instant must be whole seconds, got {t!r}")
    return t


def clock(hour: int, minute: int, second: int = 0) -> Seconds:
    if not (0 <= minute < 60 and 0 <= second < 60) or hour < 0:
        raise InvalidInstantError(f"Invalid clock time {hour}:{minute}:{second}")
    return hour * 3600 + minute * SECONDS_PER_MINUTE + second


def parse_clock(text: str) -> Seconds:
    """Parse ``HH:MM`` or ``HH:MM:SS`` into seconds since the start of the day.

    Hours past 23 are allowed so that late services stay on the same
    monotonic scale as the rest of the day.
    """
    if not isinstance(text, str):
        raise InvalidInstantError(f"Clock time must be text, got {text!r}")
    match = _CLOCK_RE.fullmatch(text.strip())
    if match is None:
        raise InvalidInstantError(f"Clock time must look like HH:MM or HH:MM:SS, got {text!r}")
    hours, minutes, seconds = match.groups()
    return clock(int(hours), int(minutes), int(seconds or 0))


def format_clock(t: Seconds) -> str:
    sign = "-" if t < 0 else ""
    hours, rest = divmod(abs(t), 3600)
    minutes, seconds = divmod(rest, SECONDS_PER_MINUTE)
    if seconds:
        return f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{sign}{hours:02d}:{minutes:02d}"


def coerce_instant(value: Union[str, int]) -> Seconds:
    # scenario files and request bodies carry either clock text or raw seconds
    if isinstance(value, str):
        return parse_clock(value)
    return ensure_instant(value)
