# barbershop/schemas/users.py

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from .base import ApiModel, reject_null


class UserCreate(ApiModel):
    first_name: str
    last_name: Optional[str] = None
    email: str
    phone: Optional[str] = None
    role: str = "client"


class UserUpdate(ApiModel):
    """Partial update; last name and phone may be cleared with null."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("first_name", "email", "role", "is_active")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class UserRead(ApiModel):
    id: int
    first_name: str
    last_name: Optional[str] = None
    email: str
    phone: Optional[str] = None
    role: str
    loyalty_points: int
    email_notifications: bool
    sms_notifications: bool
    is_active: bool
    created_at: datetime


class PreferencesUpdate(ApiModel):
    email_notifications: Optional[bool] = None
    sms_notifications: Optional[bool] = None


class PreferencesRead(ApiModel):
    email_notifications: bool
    sms_notifications: bool


class LoyaltyPointsRead(ApiModel):
    loyalty_points: int
