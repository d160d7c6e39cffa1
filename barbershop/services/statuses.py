"""
Appointment and waitlist statuses with their allowed transitions.
"""

from enum import Enum

from .errors import ValidationError


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    NO_SHOW = "no-show"


class WaitlistStatus(str, Enum):
    WAITING = "waiting"
    NOTIFIED = "notified"
    BOOKED = "booked"
    EXPIRED = "expired"


APPOINTMENT_TRANSITIONS: dict[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.PENDING: frozenset({
        AppointmentStatus.CONFIRMED,
        AppointmentStatus.CANCELLED,
        AppointmentStatus.COMPLETED,
        AppointmentStatus.NO_SHOW,
    }),
    AppointmentStatus.CONFIRMED: frozenset({
        AppointmentStatus.CANCELLED,
        AppointmentStatus.COMPLETED,
        AppointmentStatus.NO_SHOW,
    }),
    AppointmentStatus.CANCELLED: frozenset(),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.NO_SHOW: frozenset(),
}

WAITLIST_TRANSITIONS: dict[WaitlistStatus, frozenset[WaitlistStatus]] = {
    WaitlistStatus.WAITING: frozenset({WaitlistStatus.NOTIFIED, WaitlistStatus.EXPIRED}),
    WaitlistStatus.NOTIFIED: frozenset({WaitlistStatus.BOOKED, WaitlistStatus.EXPIRED}),
    WaitlistStatus.BOOKED: frozenset(),
    WaitlistStatus.EXPIRED: frozenset(),
}

# Appointments in these statuses occupy the schedule
BLOCKING_STATUSES = (
    AppointmentStatus.PENDING.value,
    AppointmentStatus.CONFIRMED.value,
    AppointmentStatus.COMPLETED.value,
)

# Moving an appointment into one of these frees its time
RELEASING_STATUSES = frozenset({AppointmentStatus.CANCELLED, AppointmentStatus.NO_SHOW})


def ensure_appointment_transition(current: str, new: AppointmentStatus) -> None:
    """Raise ValidationError unless current -> new is allowed. Same status is a no-op."""
    current_status = AppointmentStatus(current)
    if current_status == new:
        return
    if new not in APPOINTMENT_TRANSITIONS[current_status]:
        raise ValidationError(
            f"Cannot change appointment status from {current_status.value} to {new.value}"
        )


def ensure_waitlist_transition(current: str, new: WaitlistStatus) -> None:
    current_status = WaitlistStatus(current)
    if new not in WAITLIST_TRANSITIONS[current_status]:
        raise ValidationError(
            f"Cannot change waitlist status from {current_status.value} to {new.value}"
        )
