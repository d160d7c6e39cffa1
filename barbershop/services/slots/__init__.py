# barbershop/services/slots/__init__.py
"""
Slots calculation module.

Grid: fixed "HH:MM" start times spanning business hours
Availability: grid slots that fit a service without overlapping bookings
"""

from .config import (
    SchedulingConfig,
    get_scheduling_config,
    time_str_to_minutes,
    minutes_to_time_str,
)
from .calculator import generate_time_slots, is_grid_slot
from .availability import (
    BookingInterval,
    is_time_slot_available,
    get_available_time_slots,
    load_booked_intervals,
)

__all__ = [
    "SchedulingConfig",
    "get_scheduling_config",
    "time_str_to_minutes",
    "minutes_to_time_str",
    "generate_time_slots",
    "is_grid_slot",
    "BookingInterval",
    "is_time_slot_available",
    "get_available_time_slots",
    "load_booked_intervals",
]
