"""
Notification dispatch.

One event per enabled channel of the recipient:
- email when email_notifications is on
- sms when sms_notifications is on and a phone number is set

Delivery failures are logged and reported as False. Callers never roll back
on a False result.
"""

import logging
from datetime import date

from redis import Redis

from .events import emit_event

logger = logging.getLogger(__name__)


def _channels(user) -> list[str]:
    channels = []
    if user.email_notifications:
        channels.append("email")
    if user.sms_notifications and user.phone:
        channels.append("sms")
    return channels


def _dispatch(redis: Redis, event_type: str, user, payload: dict) -> bool:
    ok = True
    for channel in _channels(user):
        delivered = emit_event(redis, event_type, {
            "channel": channel,
            "user_id": user.id,
            "email": user.email,
            "phone": user.phone,
            "first_name": user.first_name,
            **payload,
        })
        ok = ok and delivered

    if not ok:
        logger.warning(f"{event_type} not fully delivered to user={user.id}")
    return ok


def notify_confirmation(redis: Redis, user, appointment, service) -> bool:
    """Appointment booked or rescheduled."""
    return _dispatch(redis, "appointment_confirmation", user, {
        "appointment_id": appointment.id,
        "service_name": service.name,
        "duration_min": appointment.duration_min,
        "price": service.price,
        "date": appointment.date,
        "time_slot": appointment.time_slot,
    })


def notify_waitlist_opening(redis: Redis, user, service, target_date: date, time_slot: str) -> bool:
    """A slot opened for a waitlisted user."""
    return _dispatch(redis, "waitlist_opening", user, {
        "service_id": service.id,
        "service_name": service.name,
        "date": target_date.isoformat(),
        "time_slot": time_slot,
    })


def notify_reminder(redis: Redis, user, appointment, service) -> bool:
    """Upcoming appointment reminder."""
    return _dispatch(redis, "appointment_reminder", user, {
        "appointment_id": appointment.id,
        "service_name": service.name,
        "date": appointment.date,
        "time_slot": appointment.time_slot,
    })
