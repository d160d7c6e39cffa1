# barbershop/routers/users.py
# DELETE deactivates (is_active = 0); email is unique across users

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Users as DBUsers
from ..schemas.users import (
    LoyaltyPointsRead,
    PreferencesRead,
    PreferencesUpdate,
    UserCreate,
    UserUpdate,
    UserRead,
)
from ..services.errors import NotFoundError, ValidationError

router = APIRouter(prefix="/users", tags=["users"])


def _get_or_404(db: Session, id: int) -> DBUsers:
    obj = db.get(DBUsers, id)
    if not obj:
        raise NotFoundError("User not found")
    return obj


def _ensure_email_free(db: Session, email: str, user_id: int | None = None) -> None:
    query = db.query(DBUsers).filter(DBUsers.email == email)
    if user_id is not None:
        query = query.filter(DBUsers.id != user_id)
    if query.first():
        raise ValidationError("Email is already in use")


@router.get("", response_model=list[UserRead])
def list_users(db: Session = Depends(get_db)):
    return (
        db.query(DBUsers)
        .filter(DBUsers.is_active == 1)
        .order_by(DBUsers.created_at.desc())
        .all()
    )


@router.get("/{id}", response_model=UserRead)
def get_user(id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, id)


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(
    data: UserCreate,
    db: Session = Depends(get_db),
):
    _ensure_email_free(db, data.email)

    obj = DBUsers(**data.model_dump())
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.patch("/{id}", response_model=UserRead)
def update_user(
    id: int,
    data: UserUpdate,
    db: Session = Depends(get_db),
):
    obj = _get_or_404(db, id)

    changes = data.model_dump(exclude_unset=True)
    if changes.get("email"):
        _ensure_email_free(db, changes["email"], id)

    for field, value in changes.items():
        setattr(obj, field, value)

    db.commit()
    db.refresh(obj)
    return obj


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(id: int, db: Session = Depends(get_db)):
    obj = _get_or_404(db, id)

    obj.is_active = 0
    db.commit()


@router.put("/{id}/preferences", response_model=PreferencesRead)
def update_preferences(
    id: int,
    data: PreferencesUpdate,
    db: Session = Depends(get_db),
):
    obj = _get_or_404(db, id)

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(obj, field, int(value))

    db.commit()
    db.refresh(obj)
    return obj


@router.get("/{id}/loyalty-points", response_model=LoyaltyPointsRead)
def get_loyalty_points(id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, id)
