"""
Waitlist reconciliation.

Runs after any write that frees time on a date (cancellation, no-show,
reschedule away). Waiting entries are matched against open slots in
first-come-first-served order:

1. waiting entries for the date, oldest first
2. no entries -> nothing to do, nothing written
3. blocking appointments of the date are loaded once
4. per entry (skipped while its service or user is inactive): open slots
   for its service; first available preferred slot,
   else the earliest open slot; entry -> notified
5. one commit, then one notification per notified entry

A slot offered to an entry is held for the rest of the pass: later entries
see it as booked, so one pass never offers overlapping time twice. The hold
is not persisted; the booking path revalidates when the user books.

Re-running for the same date without new capacity is a no-op because
notified entries are no longer waiting.
"""

import json
import logging
from dataclasses import dataclass
from datetime import date, datetime

from redis import Redis
from sqlalchemy.orm import Session

from ..models import Waitlist
from .notifications import notify_waitlist_opening
from .slots import (
    BookingInterval,
    SchedulingConfig,
    get_available_time_slots,
    get_scheduling_config,
    load_booked_intervals,
)
from .statuses import WaitlistStatus, ensure_waitlist_transition

logger = logging.getLogger(__name__)


@dataclass
class WaitlistNotice:
    entry_id: int
    user_id: int
    service_id: int
    date: date
    time_slot: str
    delivered: bool = False


def reconcile_waitlist(
    db: Session,
    target_date: date,
    redis: Redis,
    config: SchedulingConfig | None = None,
    now: datetime | None = None,
) -> list[WaitlistNotice]:
    """
    Notify waiting entries of target_date about open slots.

    Returns:
        Notices for entries moved to notified, in FCFS order.
    """
    config = config or get_scheduling_config()
    now = now or datetime.utcnow()

    entries = get_waiting_entries(db, target_date)
    if not entries:
        return []

    booked = load_booked_intervals(db, target_date)
    notices: list[WaitlistNotice] = []
    notified: list[Waitlist] = []

    for entry in entries:
        if not entry.service.is_active or not entry.user.is_active:
            continue  # stays waiting

        duration = entry.service.duration_min
        available = get_available_time_slots(target_date, booked, duration, config)
        if not available:
            continue

        time_slot = select_slot(parse_preferred_slots(entry.preferred_time_slots), available)

        ensure_waitlist_transition(entry.status, WaitlistStatus.NOTIFIED)
        entry.status = WaitlistStatus.NOTIFIED.value
        entry.notified_at = now.isoformat()
        entry.notified_slot = time_slot

        # Hold the offered slot for later entries of this pass
        booked.append(BookingInterval.from_slot(time_slot, duration))

        notified.append(entry)
        notices.append(WaitlistNotice(
            entry_id=entry.id,
            user_id=entry.user_id,
            service_id=entry.service_id,
            date=target_date,
            time_slot=time_slot,
        ))

    if not notified:
        logger.info(f"Waitlist {target_date.isoformat()}: {len(entries)} waiting, no open slots")
        return []

    db.commit()

    for entry, notice in zip(notified, notices):
        notice.delivered = notify_waitlist_opening(
            redis, entry.user, entry.service, target_date, notice.time_slot
        )
        logger.info(
            f"Waitlist entry={entry.id} user={entry.user_id} notified: "
            f"{target_date.isoformat()} {notice.time_slot}"
        )

    return notices


def select_slot(preferred: list[str], available: list[str]) -> str:
    """First preferred slot that is open, else the earliest open slot."""
    open_slots = set(available)
    for time_slot in preferred:
        if time_slot in open_slots:
            return time_slot
    return available[0]


def parse_preferred_slots(raw: str | None) -> list[str]:
    try:
        slots = json.loads(raw) if raw else []
    except (json.JSONDecodeError, TypeError):
        slots = []
    if not isinstance(slots, list):
        return []
    return [s for s in slots if isinstance(s, str)]


# ── Database helpers ─────────────────────────────────────────────────────


def get_waiting_entries(db: Session, target_date: date) -> list[Waitlist]:
    """Waiting entries for target_date, oldest first."""
    return (
        db.query(Waitlist)
        .filter(
            Waitlist.date == target_date.isoformat(),
            Waitlist.status == WaitlistStatus.WAITING.value,
        )
        .order_by(Waitlist.created_at.asc(), Waitlist.id.asc())
        .all()
    )
