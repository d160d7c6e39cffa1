# barbershop/schemas/appointments.py

from datetime import date, datetime
from typing import Optional

from pydantic import Field

from ..services.statuses import AppointmentStatus
from .base import ApiModel


class AppointmentCreate(ApiModel):
    service_id: int
    date: str = Field(description="ISO date, e.g. 2026-10-20")
    time_slot: str = Field(description="Start time in HH:MM format")
    notes: Optional[str] = None
    user_id: Optional[int] = Field(None, description="Book on behalf of another user")


class AppointmentStatusUpdate(ApiModel):
    status: AppointmentStatus
    notes: Optional[str] = None


class AppointmentReschedule(ApiModel):
    date: str = Field(description="ISO date, e.g. 2026-10-20")
    time_slot: str = Field(description="Start time in HH:MM format")


class AppointmentRead(ApiModel):
    id: int
    user_id: int
    service_id: int
    date: date
    time_slot: str
    duration_min: int
    status: AppointmentStatus
    notes: Optional[str] = None
    reminder_sent: bool
    created_at: datetime
    updated_at: datetime


class ServiceSummary(ApiModel):
    name: str
    price: float
    duration_min: int


class UserAppointmentRead(ApiModel):
    id: int
    date: date
    time_slot: str
    status: AppointmentStatus
    service: ServiceSummary
    notes: Optional[str] = None
    created_at: datetime


class Pagination(ApiModel):
    total: int
    page: int
    pages: int


class AppointmentPage(ApiModel):
    appointments: list[AppointmentRead]
    pagination: Pagination


class MessageResponse(ApiModel):
    message: str
