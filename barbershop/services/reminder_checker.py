"""
Appointment reminder checker.

Periodically looks for upcoming appointments and emits appointment_reminder
events to their clients.

remind_before_minutes (settings) sets how far ahead reminders go out.
0 = reminders disabled.

Runs as an asyncio task in the application lifespan.
Uses synchronous DB and Redis (via asyncio.to_thread).
"""

import asyncio
import logging
from datetime import datetime, timedelta

from redis import Redis
from sqlalchemy.orm import Session

from ..config import settings
from ..database import SessionLocal
from ..models import Appointments
from ..redis_client import redis_client
from .notifications import notify_reminder
from .statuses import AppointmentStatus

logger = logging.getLogger(__name__)

REMINDABLE_STATUSES = (AppointmentStatus.PENDING.value, AppointmentStatus.CONFIRMED.value)


async def reminder_checker_loop() -> None:
    """
    Periodic loop that sends reminders for appointments starting within
    remind_before_minutes.
    """
    if settings.remind_before_minutes <= 0:
        logger.info("reminder_checker_loop disabled (remind_before_minutes=0)")
        return

    logger.info("reminder_checker_loop started")

    try:
        while True:
            try:
                await asyncio.to_thread(_check_upcoming_appointments)
            except asyncio.CancelledError:
                logger.info("reminder_checker_loop cancelled")
                raise
            except Exception:
                logger.exception("reminder_checker_loop error")

            await asyncio.sleep(settings.reminder_check_interval)
    except asyncio.CancelledError:
        pass


def _check_upcoming_appointments() -> None:
    """Synchronous pass with its own session."""
    db = SessionLocal()
    try:
        send_due_reminders(db, redis_client, datetime.now(), settings.remind_before_minutes)
    finally:
        db.close()


def send_due_reminders(
    db: Session,
    redis: Redis,
    now: datetime,
    remind_before_minutes: int,
) -> int:
    """
    Send reminders for appointments with now <= start <= now + window.

    Returns:
        Number of reminded appointments.
    """
    horizon = now + timedelta(minutes=remind_before_minutes)

    appointments = (
        db.query(Appointments)
        .filter(
            Appointments.status.in_(REMINDABLE_STATUSES),
            Appointments.reminder_sent == 0,
            Appointments.date >= now.date().isoformat(),
            Appointments.date <= horizon.date().isoformat(),
        )
        .all()
    )

    sent = 0
    for appointment in appointments:
        try:
            starts_at = datetime.fromisoformat(f"{appointment.date}T{appointment.time_slot}")
        except ValueError:
            logger.warning(f"Appointment {appointment.id} has invalid date/time, skipped")
            continue

        if not now <= starts_at <= horizon:
            continue

        # Mark first: a reminder is sent at most once
        appointment.reminder_sent = 1
        db.commit()

        notify_reminder(redis, appointment.user, appointment, appointment.service)
        sent += 1

        logger.info(
            f"appointment_reminder emitted for appointment={appointment.id} "
            f"(starts {starts_at.strftime('%Y-%m-%d %H:%M')})"
        )

    return sent
