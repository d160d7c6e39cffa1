# barbershop/services/slots/availability.py
"""
Service availability calculation.

Decides which grid slots can host a service of a given duration on a day,
given the appointments already booked on that day.

Takes into account:
- Business hours (an appointment may not run past closing time)
- Existing blocking appointments (pending / confirmed / completed)

Overlap check is linear in the number of bookings for the day.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from sqlalchemy.orm import Session

from ..statuses import BLOCKING_STATUSES
from .calculator import generate_time_slots
from .config import SchedulingConfig, get_scheduling_config, time_str_to_minutes


@dataclass(frozen=True)
class BookingInterval:
    """[start, end) in minutes since midnight. Used only for overlap math."""
    start: int
    end: int

    @classmethod
    def from_slot(cls, time_slot: str, duration_min: int) -> "BookingInterval":
        start = time_str_to_minutes(time_slot)
        return cls(start, start + duration_min)

    def overlaps(self, other: "BookingInterval") -> bool:
        """
        Three-way overlap test. Touching boundaries (self.end == other.start)
        do not conflict.
        """
        return (
            (other.start <= self.start < other.end)
            or (other.start < self.end <= other.end)
            or (self.start <= other.start and self.end >= other.end)
        )


def is_time_slot_available(
    time_slot: str,
    existing: Iterable[BookingInterval],
    duration_min: int,
    config: SchedulingConfig | None = None,
) -> bool:
    """
    Check whether time_slot can host a service of duration_min minutes.

    Returns False for a malformed slot, a slot outside business hours,
    an appointment that would run past closing time, or any overlap with
    an existing booking.
    """
    config = config or get_scheduling_config()

    try:
        candidate = BookingInterval.from_slot(time_slot, duration_min)
    except ValueError:
        return False

    if candidate.start < config.opening_minutes or candidate.end > config.closing_minutes:
        return False

    for booking in existing:
        if candidate.overlaps(booking):
            return False

    return True


def get_available_time_slots(
    target_date: date,
    existing: Iterable[BookingInterval],
    duration_min: int,
    config: SchedulingConfig | None = None,
) -> list[str]:
    """
    Get open start times for a service on target_date.

    existing must already exclude cancelled / no-show appointments.

    Returns:
        "HH:MM" strings in grid order. Empty list = fully booked day.
    """
    config = config or get_scheduling_config()
    existing = list(existing)

    return [
        time_slot
        for time_slot in generate_time_slots(config)
        if is_time_slot_available(time_slot, existing, duration_min, config)
    ]


# ── Database helpers ─────────────────────────────────────────────────────


def load_booked_intervals(
    db: Session,
    target_date: date,
    exclude_id: int | None = None,
) -> list[BookingInterval]:
    """
    Get intervals of blocking appointments on target_date.

    Durations come from the appointment row, fixed at booking time, not
    from the current service.
    """
    from ...models import Appointments

    query = (
        db.query(Appointments.time_slot, Appointments.duration_min)
        .filter(
            Appointments.date == target_date.isoformat(),
            Appointments.status.in_(BLOCKING_STATUSES),
        )
    )
    if exclude_id is not None:
        query = query.filter(Appointments.id != exclude_id)

    return [
        BookingInterval.from_slot(time_slot, duration_min)
        for time_slot, duration_min in query.all()
    ]
