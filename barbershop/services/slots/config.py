# barbershop/services/slots/config.py
"""
Scheduling configuration for slots calculation.
"""

from dataclasses import dataclass
from datetime import date
from functools import lru_cache


@dataclass(frozen=True)
class SchedulingConfig:
    """
    Configuration for the scheduling engine.

    Attributes:
        business_start_hour: Opening hour, 24h clock (inclusive)
        business_end_hour: Closing hour, 24h clock (exclusive)
        slot_interval_minutes: Grid step in minutes
        closed_weekdays: date.weekday() values the shop is closed on
    """
    business_start_hour: int = 9
    business_end_hour: int = 18
    slot_interval_minutes: int = 30
    closed_weekdays: tuple[int, ...] = (5, 6)

    def __post_init__(self):
        """Validate configuration."""
        if not 0 <= self.business_start_hour < self.business_end_hour <= 24:
            raise ValueError(
                "business hours must satisfy 0 <= start < end <= 24, "
                f"got {self.business_start_hour}-{self.business_end_hour}"
            )
        if self.slot_interval_minutes <= 0:
            raise ValueError(
                f"slot_interval_minutes must be positive, got {self.slot_interval_minutes}"
            )
        if self.open_minutes % self.slot_interval_minutes:
            raise ValueError(
                f"{self.open_minutes} business minutes are not a multiple of "
                f"slot_interval_minutes={self.slot_interval_minutes}"
            )
        if any(not 0 <= d <= 6 for d in self.closed_weekdays):
            raise ValueError(f"closed_weekdays must be within 0..6, got {self.closed_weekdays}")

    @property
    def opening_minutes(self) -> int:
        return self.business_start_hour * 60

    @property
    def closing_minutes(self) -> int:
        return self.business_end_hour * 60

    @property
    def open_minutes(self) -> int:
        return self.closing_minutes - self.opening_minutes

    @property
    def slots_per_day(self) -> int:
        """
        Number of slots in the grid.

        - 09-18, 30 min -> 18 slots
        - 09-18, 15 min -> 36 slots
        """
        return self.open_minutes // self.slot_interval_minutes

    def is_business_day(self, target_date: date) -> bool:
        return target_date.weekday() not in self.closed_weekdays


def time_str_to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes since midnight."""
    if not isinstance(value, str) or len(value) != 5 or value[2] != ":":
        raise ValueError(f"Time must be in HH:MM format, got {value!r}")
    hours, minutes = value[:2], value[3:]
    if not (hours.isdigit() and minutes.isdigit()):
        raise ValueError(f"Time must be in HH:MM format, got {value!r}")
    hours, minutes = int(hours), int(minutes)
    if hours > 23 or minutes > 59:
        raise ValueError(f"Time out of range: {value!r}")
    return hours * 60 + minutes


def minutes_to_time_str(total_minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM"."""
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


@lru_cache
def get_scheduling_config() -> SchedulingConfig:
    """Scheduling configuration built from application settings (singleton)."""
    from ...config import settings

    return SchedulingConfig(
        business_start_hour=settings.business_start_hour,
        business_end_hour=settings.business_end_hour,
        slot_interval_minutes=settings.slot_interval_minutes,
        closed_weekdays=tuple(settings.closed_weekdays),
    )
