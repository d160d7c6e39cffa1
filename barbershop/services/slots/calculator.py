# barbershop/services/slots/calculator.py
"""
Slot grid generation.

The grid is the ordered list of "HH:MM" start times covering
[business_start_hour, business_end_hour) in slot_interval_minutes steps.
Every TimeSlot accepted by the system is a member of this grid.
"""

from .config import SchedulingConfig, get_scheduling_config, minutes_to_time_str


def generate_time_slots(config: SchedulingConfig | None = None) -> list[str]:
    """
    Generate the day grid.

    09:00-18:00 with a 30 minute step -> ["09:00", "09:30", ..., "17:30"]
    """
    config = config or get_scheduling_config()
    step = config.slot_interval_minutes

    return [
        minutes_to_time_str(config.opening_minutes + i * step)
        for i in range(config.slots_per_day)
    ]


def is_grid_slot(time_slot: str, config: SchedulingConfig | None = None) -> bool:
    """Whether time_slot is one of the grid start times."""
    return time_slot in generate_time_slots(config)
