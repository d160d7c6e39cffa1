"""Status transitions."""
import pytest

from barbershop.services.errors import ValidationError
from barbershop.services.statuses import (
    AppointmentStatus,
    WaitlistStatus,
    ensure_appointment_transition,
    ensure_waitlist_transition,
)


@pytest.mark.parametrize("current,new", [
    ("pending", AppointmentStatus.CONFIRMED),
    ("pending", AppointmentStatus.CANCELLED),
    ("confirmed", AppointmentStatus.COMPLETED),
    ("confirmed", AppointmentStatus.NO_SHOW),
    ("confirmed", AppointmentStatus.CONFIRMED),
])
def test_allowed_appointment_transitions(current, new):
    ensure_appointment_transition(current, new)


@pytest.mark.parametrize("current,new", [
    ("completed", AppointmentStatus.PENDING),
    ("cancelled", AppointmentStatus.CONFIRMED),
    ("no-show", AppointmentStatus.COMPLETED),
    ("confirmed", AppointmentStatus.PENDING),
])
def test_illegal_appointment_transitions(current, new):
    with pytest.raises(ValidationError):
        ensure_appointment_transition(current, new)


def test_waitlist_transitions():
    ensure_waitlist_transition("waiting", WaitlistStatus.NOTIFIED)
    ensure_waitlist_transition("notified", WaitlistStatus.BOOKED)
    ensure_waitlist_transition("waiting", WaitlistStatus.EXPIRED)
    for current in ("booked", "expired"):
        with pytest.raises(ValidationError):
            ensure_waitlist_transition(current, WaitlistStatus.WAITING)
    with pytest.raises(ValidationError):
        ensure_waitlist_transition("notified", WaitlistStatus.NOTIFIED)
