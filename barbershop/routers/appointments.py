# barbershop/routers/appointments.py
# DELETE = soft-cancel (status=cancelled)

from math import ceil
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from redis import Redis
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_current_user_id
from ..models import Appointments as DBAppointments
from ..redis_client import get_redis
from ..schemas.appointments import (
    AppointmentCreate,
    AppointmentPage,
    AppointmentRead,
    AppointmentReschedule,
    AppointmentStatusUpdate,
    MessageResponse,
    Pagination,
    UserAppointmentRead,
)
from ..services import booking

router = APIRouter(prefix="/appointments", tags=["appointments"])


@router.get("", response_model=AppointmentPage)
def list_appointments(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    date_from: Optional[str] = Query(None, alias="dateFrom"),
    date_to: Optional[str] = Query(None, alias="dateTo"),
    db: Session = Depends(get_db),
):
    query = db.query(DBAppointments)
    if date_from:
        query = query.filter(DBAppointments.date >= booking.parse_date(date_from).isoformat())
    if date_to:
        query = query.filter(DBAppointments.date <= booking.parse_date(date_to).isoformat())

    total = query.count()
    appointments = (
        query
        .order_by(DBAppointments.date.asc(), DBAppointments.time_slot.asc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return AppointmentPage(
        appointments=[AppointmentRead.model_validate(a) for a in appointments],
        pagination=Pagination(total=total, page=page, pages=ceil(total / limit)),
    )


@router.get("/user", response_model=list[UserAppointmentRead])
def list_my_appointments(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return (
        db.query(DBAppointments)
        .filter(DBAppointments.user_id == user_id)
        .order_by(DBAppointments.date.desc(), DBAppointments.time_slot.desc())
        .all()
    )


@router.get("/{id}", response_model=AppointmentRead)
def get_appointment(id: int, db: Session = Depends(get_db)):
    return booking.get_appointment(db, id)


@router.post("", response_model=AppointmentRead, status_code=status.HTTP_201_CREATED)
def create_appointment(
    data: AppointmentCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    redis: Redis = Depends(get_redis),
):
    return booking.create_appointment(
        db,
        redis,
        user_id=data.user_id or user_id,
        service_id=data.service_id,
        date_value=data.date,
        time_slot=data.time_slot,
        notes=data.notes,
    )


@router.put("/{id}", response_model=AppointmentRead)
def update_appointment(
    id: int,
    data: AppointmentStatusUpdate,
    db: Session = Depends(get_db),
    redis: Redis = Depends(get_redis),
):
    return booking.update_appointment_status(db, redis, id, data.status, data.notes)


@router.put("/{id}/reschedule", response_model=AppointmentRead)
def reschedule_appointment(
    id: int,
    data: AppointmentReschedule,
    db: Session = Depends(get_db),
    redis: Redis = Depends(get_redis),
):
    return booking.reschedule_appointment(db, redis, id, data.date, data.time_slot)


@router.delete("/{id}", response_model=MessageResponse)
def cancel_appointment(
    id: int,
    db: Session = Depends(get_db),
    redis: Redis = Depends(get_redis),
):
    booking.cancel_appointment(db, redis, id)
    return MessageResponse(message="Appointment cancelled")
