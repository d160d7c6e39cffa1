"""
Booking flows.

Every write that touches the schedule runs under the per-date lock:

    lock(date) → load blocking appointments → availability check → write → commit

Follow-ups after the commit are best-effort and never undo the write:
loyalty points, confirmation notification, waitlist reconciliation.
"""

import json
import logging
from datetime import date, datetime

from redis import Redis
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Appointments, Services, Users, Waitlist
from .errors import ConflictError, NotFoundError, ValidationError
from .locks import date_lock, dates_lock
from .notifications import notify_confirmation
from .slots import (
    SchedulingConfig,
    get_available_time_slots,
    get_scheduling_config,
    is_grid_slot,
    is_time_slot_available,
    load_booked_intervals,
    time_str_to_minutes,
)
from .statuses import (
    AppointmentStatus,
    RELEASING_STATUSES,
    WaitlistStatus,
    ensure_appointment_transition,
)
from .waitlist import reconcile_waitlist

logger = logging.getLogger(__name__)

RESCHEDULABLE_STATUSES = (AppointmentStatus.PENDING.value, AppointmentStatus.CONFIRMED.value)


# ── Validation helpers ───────────────────────────────────────────────────


def parse_date(value: str | None) -> date:
    """
    Parse an ISO date ("2026-10-20") or datetime ("2026-10-20T10:00:00Z").

    Raises:
        ValidationError: missing or unparseable value
    """
    if not value:
        raise ValidationError("Date is required")
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError("Invalid date format") from None


def ensure_bookable_date(
    target_date: date,
    config: SchedulingConfig,
    today: date | None = None,
) -> None:
    today = today or date.today()
    if target_date < today:
        raise ValidationError("Cannot book appointments in the past")
    if not config.is_business_day(target_date):
        raise ValidationError("Selected date is not a business day")


def ensure_grid_slot(time_slot: str | None, config: SchedulingConfig) -> str:
    if not time_slot:
        raise ValidationError("Time slot is required")
    try:
        time_str_to_minutes(time_slot)
    except ValueError:
        raise ValidationError("Time slot must be in HH:MM format") from None
    if not is_grid_slot(time_slot, config):
        raise ValidationError(f"{time_slot} is not a bookable time slot")
    return time_slot


def get_active_service(db: Session, service_id: int | None) -> Services:
    if service_id is None:
        raise ValidationError("Service ID is required")
    service = db.get(Services, service_id)
    if not service or not service.is_active:
        raise NotFoundError("Service not found")
    return service


def get_user(db: Session, user_id: int) -> Users:
    user = db.get(Users, user_id)
    if not user or not user.is_active:
        raise NotFoundError("User not found")
    return user


def get_appointment(db: Session, appointment_id: int) -> Appointments:
    appointment = db.get(Appointments, appointment_id)
    if not appointment:
        raise NotFoundError("Appointment not found")
    return appointment


# ── Queries ──────────────────────────────────────────────────────────────


def available_slots(
    db: Session,
    date_value: str | None,
    service_id: int | None,
    config: SchedulingConfig | None = None,
    today: date | None = None,
) -> list[str]:
    """Open "HH:MM" start times for a service on a date."""
    config = config or get_scheduling_config()

    target_date = parse_date(date_value)
    if service_id is None:
        raise ValidationError("Date and service ID are required")
    ensure_bookable_date(target_date, config, today)
    service = get_active_service(db, service_id)

    booked = load_booked_intervals(db, target_date)
    return get_available_time_slots(target_date, booked, service.duration_min, config)


# ── Appointment writes ───────────────────────────────────────────────────


def create_appointment(
    db: Session,
    redis: Redis,
    user_id: int,
    service_id: int,
    date_value: str,
    time_slot: str,
    notes: str | None = None,
    config: SchedulingConfig | None = None,
    today: date | None = None,
) -> Appointments:
    """
    Book a service for a user.

    Raises:
        ValidationError: bad date / slot
        NotFoundError: unknown service or user
        ConflictError: slot taken or date locked
    """
    config = config or get_scheduling_config()

    service = get_active_service(db, service_id)
    user = get_user(db, user_id)
    target_date = parse_date(date_value)
    ensure_bookable_date(target_date, config, today)
    ensure_grid_slot(time_slot, config)

    with date_lock(redis, target_date):
        booked = load_booked_intervals(db, target_date)
        if not is_time_slot_available(time_slot, booked, service.duration_min, config):
            raise ConflictError("The selected time slot is no longer available")

        appointment = Appointments(
            user_id=user.id,
            service_id=service.id,
            date=target_date.isoformat(),
            time_slot=time_slot,
            duration_min=service.duration_min,
            status=AppointmentStatus.CONFIRMED.value,
            notes=notes,
        )
        db.add(appointment)
        db.commit()
        db.refresh(appointment)

    logger.info(
        f"Appointment created: id={appointment.id}, user={user.id}, "
        f"service={service.name}, time={appointment.date} {appointment.time_slot}"
    )

    _award_loyalty_points(db, user.id, service.loyalty_points_earned)
    notify_confirmation(redis, user, appointment, service)

    return appointment


def update_appointment_status(
    db: Session,
    redis: Redis,
    appointment_id: int,
    new_status: AppointmentStatus,
    notes: str | None = None,
    config: SchedulingConfig | None = None,
) -> Appointments:
    """Apply a status transition; cancelled / no-show release the time."""
    appointment = get_appointment(db, appointment_id)
    target_date = date.fromisoformat(appointment.date)

    with date_lock(redis, target_date):
        db.refresh(appointment)
        previous = appointment.status
        ensure_appointment_transition(previous, new_status)

        appointment.status = new_status.value
        if notes:
            appointment.notes = notes
        db.commit()
        db.refresh(appointment)

    if previous != new_status.value:
        logger.info(f"Appointment {appointment.id}: {previous} → {new_status.value}")

    if previous != new_status.value and new_status in RELEASING_STATUSES:
        _reconcile_after_write(db, redis, target_date, config)

    return appointment


def reschedule_appointment(
    db: Session,
    redis: Redis,
    appointment_id: int,
    date_value: str,
    time_slot: str,
    config: SchedulingConfig | None = None,
    today: date | None = None,
) -> Appointments:
    """
    Move an appointment to a new date / slot.

    The appointment's own time is ignored during the availability check,
    so it can be shifted into a slot it partially overlaps. The duration
    booked originally is kept.
    """
    config = config or get_scheduling_config()

    appointment = get_appointment(db, appointment_id)
    if appointment.status not in RESCHEDULABLE_STATUSES:
        raise ValidationError(f"Cannot reschedule a {appointment.status} appointment")

    new_date = parse_date(date_value)
    ensure_bookable_date(new_date, config, today)
    ensure_grid_slot(time_slot, config)

    old_date = date.fromisoformat(appointment.date)
    service = appointment.service

    with dates_lock(redis, [old_date, new_date]):
        db.refresh(appointment)
        if appointment.status not in RESCHEDULABLE_STATUSES:
            raise ValidationError(f"Cannot reschedule a {appointment.status} appointment")

        booked = load_booked_intervals(db, new_date, exclude_id=appointment.id)
        if not is_time_slot_available(time_slot, booked, appointment.duration_min, config):
            raise ConflictError("The selected time slot is no longer available")

        appointment.date = new_date.isoformat()
        appointment.time_slot = time_slot
        appointment.reminder_sent = 0
        db.commit()
        db.refresh(appointment)

    logger.info(
        f"Appointment {appointment.id} rescheduled: "
        f"{old_date.isoformat()} → {appointment.date} {appointment.time_slot}"
    )

    notify_confirmation(redis, appointment.user, appointment, service)

    for affected in sorted({old_date, new_date}):
        _reconcile_after_write(db, redis, affected, config)

    return appointment


def cancel_appointment(
    db: Session,
    redis: Redis,
    appointment_id: int,
    config: SchedulingConfig | None = None,
    now: datetime | None = None,
) -> Appointments:
    """Soft-cancel: status → cancelled, the row stays."""
    now = now or datetime.now()

    appointment = get_appointment(db, appointment_id)
    starts_at = datetime.fromisoformat(f"{appointment.date}T{appointment.time_slot}")
    if starts_at < now:
        raise ValidationError("Cannot cancel past appointments")

    return update_appointment_status(
        db, redis, appointment_id, AppointmentStatus.CANCELLED, config=config
    )


# ── Waitlist writes ──────────────────────────────────────────────────────


def join_waitlist(
    db: Session,
    user_id: int,
    service_id: int,
    date_value: str,
    preferred_time_slots: list[str] | None = None,
    config: SchedulingConfig | None = None,
    today: date | None = None,
) -> Waitlist:
    """Add a waiting entry. One waiting entry per user / service / date."""
    config = config or get_scheduling_config()

    target_date = parse_date(date_value)
    today = today or date.today()
    if target_date < today:
        raise ValidationError("Cannot join waitlist for past dates")
    if not config.is_business_day(target_date):
        raise ValidationError("Selected date is not a business day")

    service = get_active_service(db, service_id)
    user = get_user(db, user_id)

    preferred = [ensure_grid_slot(s, config) for s in (preferred_time_slots or [])]

    existing = (
        db.query(Waitlist)
        .filter(
            Waitlist.user_id == user.id,
            Waitlist.service_id == service.id,
            Waitlist.date == target_date.isoformat(),
            Waitlist.status == WaitlistStatus.WAITING.value,
        )
        .first()
    )
    if existing:
        raise ValidationError("You are already on the waitlist for this date and service")

    entry = Waitlist(
        user_id=user.id,
        service_id=service.id,
        date=target_date.isoformat(),
        preferred_time_slots=json.dumps(preferred),
        status=WaitlistStatus.WAITING.value,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)

    logger.info(f"Waitlist entry {entry.id}: user={user.id}, service={service.id}, date={entry.date}")
    return entry


# ── Best-effort follow-ups ───────────────────────────────────────────────


def _award_loyalty_points(db: Session, user_id: int, points: int) -> None:
    """Atomic increment; failure leaves the booking in place."""
    if not points:
        return
    try:
        (
            db.query(Users)
            .filter(Users.id == user_id)
            .update(
                {Users.loyalty_points: Users.loyalty_points + points},
                synchronize_session=False,
            )
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to award {points} loyalty points to user={user_id}")


def _reconcile_after_write(
    db: Session,
    redis: Redis,
    target_date: date,
    config: SchedulingConfig | None,
) -> None:
    """
    Run the waitlist pass under the date lock, so two releases of the same
    date never offer one waiting entry twice. A failed pass is retried by the
    next write that frees time on the date.
    """
    try:
        with date_lock(redis, target_date):
            reconcile_waitlist(db, target_date, redis, config)
    except ConflictError:
        logger.warning(f"Waitlist reconciliation skipped for {target_date.isoformat()}: date is locked")
    except Exception:
        db.rollback()
        logger.exception(f"Waitlist reconciliation failed for {target_date.isoformat()}")
