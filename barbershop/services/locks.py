"""
Per-date advisory locks.

Every appointment write (create, status change, reschedule, cancel) runs its
read-check-write sequence while holding lock:appointments:{date} in Redis, so
two requests for the same date are serialized across workers.
"""

import logging
from contextlib import ExitStack, contextmanager
from datetime import date
from typing import Iterator

from redis import Redis
from redis.exceptions import LockError

from ..config import settings
from .errors import ConflictError

logger = logging.getLogger(__name__)

LOCK_PREFIX = "lock:appointments"


def lock_key(target_date: date) -> str:
    return f"{LOCK_PREFIX}:{target_date.isoformat()}"


@contextmanager
def date_lock(
    redis: Redis,
    target_date: date,
    timeout: float | None = None,
    wait: float | None = None,
) -> Iterator[None]:
    """
    Hold the booking lock for target_date.

    Raises:
        ConflictError: lock not acquired within `wait` seconds
    """
    lock = redis.lock(
        lock_key(target_date),
        timeout=timeout if timeout is not None else settings.lock_timeout,
        blocking_timeout=wait if wait is not None else settings.lock_wait,
    )
    try:
        acquired = lock.acquire()
    except LockError:
        acquired = False
    if not acquired:
        logger.warning(f"Booking lock busy for {target_date.isoformat()}")
        raise ConflictError("This date is being booked by another request, please retry")

    try:
        yield
    finally:
        try:
            lock.release()
        except LockError:
            # Expired before release; another worker may already hold it
            logger.warning(f"Booking lock for {target_date.isoformat()} expired before release")


@contextmanager
def dates_lock(redis: Redis, dates: list[date]) -> Iterator[None]:
    """Hold locks for several dates, acquired in ascending order."""
    with ExitStack() as stack:
        for target_date in sorted(set(dates)):
            stack.enter_context(date_lock(redis, target_date))
        yield
