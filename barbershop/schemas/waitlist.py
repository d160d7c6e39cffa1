# barbershop/schemas/waitlist.py

import json
from datetime import date, datetime
from typing import Optional

from pydantic import Field, field_validator

from ..services.statuses import WaitlistStatus
from .base import ApiModel


class WaitlistCreate(ApiModel):
    date: str = Field(description="ISO date, e.g. 2026-10-20")
    service_id: int
    preferred_time_slots: list[str] = Field(default_factory=list, description="HH:MM, most wanted first")


class WaitlistRead(ApiModel):
    id: int
    user_id: int
    service_id: int
    date: date
    preferred_time_slots: list[str]
    status: WaitlistStatus
    notified_at: Optional[datetime] = None
    notified_slot: Optional[str] = None
    created_at: datetime

    @field_validator("preferred_time_slots", mode="before")
    @classmethod
    def decode_slots(cls, v):
        """Stored as a JSON array in a text column."""
        if isinstance(v, str):
            try:
                return json.loads(v) if v else []
            except json.JSONDecodeError:
                return []
        return v or []
