# barbershop/routers/slots.py
"""
Availability endpoint.

GET /available?date=YYYY-MM-DD&serviceId=N → ["09:00", "09:30", ...]
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..services.booking import available_slots

router = APIRouter(tags=["slots"])


@router.get("/available", response_model=list[str])
def get_available_slots(
    date: Optional[str] = Query(None, description="ISO date"),
    service_id: Optional[int] = Query(None, alias="serviceId"),
    db: Session = Depends(get_db),
):
    """Open start times for a service on a day, ascending."""
    return available_slots(db, date, service_id)
