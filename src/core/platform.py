import logging
from typing import Dict, List, Tuple

from src.core.models import (
    Accepted,
    BookingKind,
    BookingResult,
    Conflict,
    Seconds,
    ensure_instant,
    format_clock,
)

logger = logging.getLogger(__name__)

# Minimum separation between two bookings of the same kind on one platform.
# A booking exactly one gap away is accepted.
MIN_GAP_SECONDS: Dict[BookingKind, Seconds] = {
    BookingKind.STOPPAGE: 30 * 60,
    BookingKind.THROUGH: 10 * 60,
}


class Platform:
    """Admission control for one platform.

    Stoppages and throughs are kept on separate timelines and never
    constrain each other. Timelines only grow, and only when a booking is
    accepted.
    """

    def __init__(self, platform_id: int) -> None:
        if isinstance(platform_id, bool) or not isinstance(platform_id, int):
            raise ValueError(f"Platform id must be an integer, got {platform_id!r}")
        self._id = platform_id
        self._timelines: Dict[BookingKind, List[Seconds]] = {kind: [] for kind in BookingKind}

    @property
    def id(self) -> int:
        return self._id

    def get_id(self) -> int:
        return self._id

    def timeline(self, kind: BookingKind) -> Tuple[Seconds, ...]:
        return tuple(self._timelines[BookingKind(kind)])

    def try_book(self, kind: BookingKind, t: Seconds) -> BookingResult:
        kind = BookingKind(kind)
        t = ensure_instant(t)
        gap = MIN_GAP_SECONDS[kind]
        booked = self._timelines[kind]

        # First conflicting entry in booking order is reported
        for other in booked:
            if abs(t - other) < gap:
                logger.debug(
                    "Platform %s: %s at %s conflicts with %s",
                    self._id, kind.value, format_clock(t), format_clock(other),
                )
                return Conflict(kind=kind, at=t, conflicting_at=other)

        booked.append(t)
        logger.debug("Platform %s: %s booked at %s", self._id, kind.value, format_clock(t))
        return Accepted(kind=kind, at=t)

    def can_accommodate_stoppage(self, t: Seconds) -> bool:
        return self.try_book(BookingKind.STOPPAGE, t).accepted

    def can_accommodate_through(self, t: Seconds) -> bool:
        return self.try_book(BookingKind.THROUGH, t).accepted

    def __repr__(self) -> str:
        return (
            f"Platform(id={self._id}, "
            f"stoppages={len(self._timelines[BookingKind.STOPPAGE])}, "
            f"throughs={len(self._timelines[BookingKind.THROUGH])})"
        )
