# barbershop/routers/waitlist.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_current_user_id
from ..schemas.waitlist import WaitlistCreate, WaitlistRead
from ..services import booking
from ..services.waitlist import get_waiting_entries

router = APIRouter(prefix="/waitlist", tags=["waitlist"])


@router.get("", response_model=list[WaitlistRead])
def list_waiting(date: str, db: Session = Depends(get_db)):
    """Waiting entries for a date, first come first."""
    return get_waiting_entries(db, booking.parse_date(date))


@router.post("", response_model=WaitlistRead, status_code=status.HTTP_201_CREATED)
def join_waitlist(
    data: WaitlistCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return booking.join_waitlist(
        db,
        user_id=user_id,
        service_id=data.service_id,
        date_value=data.date,
        preferred_time_slots=data.preferred_time_slots,
    )
