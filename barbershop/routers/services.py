# barbershop/routers/services.py
"""
Service catalogue.

DELETE only deactivates: appointments and waitlist entries keep pointing at
the row. Booked appointments carry their own duration, so a duration change
applies to new bookings only.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Services as DBServices
from ..schemas.services import ServiceCreate, ServiceRead, ServiceUpdate
from ..services.errors import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/services", tags=["services"])


def _load_service(db: Session, service_id: int) -> DBServices:
    service = db.get(DBServices, service_id)
    if not service:
        raise NotFoundError("Service not found")
    return service


@router.get("", response_model=list[ServiceRead])
def list_services(db: Session = Depends(get_db)):
    """Active services, cheapest first."""
    return (
        db.query(DBServices)
        .filter(DBServices.is_active == 1)
        .order_by(DBServices.price.asc(), DBServices.id.asc())
        .all()
    )


@router.get("/{id}", response_model=ServiceRead)
def get_service(id: int, db: Session = Depends(get_db)):
    return _load_service(db, id)


@router.post("", response_model=ServiceRead, status_code=status.HTTP_201_CREATED)
def create_service(data: ServiceCreate, db: Session = Depends(get_db)):
    service = DBServices(**data.model_dump())
    db.add(service)
    db.commit()
    db.refresh(service)

    logger.info(f"Service created: id={service.id}, name={service.name}, duration={service.duration_min}m")
    return service


@router.patch("/{id}", response_model=ServiceRead)
def update_service(id: int, data: ServiceUpdate, db: Session = Depends(get_db)):
    service = _load_service(db, id)

    changes = data.model_dump(exclude_unset=True)
    if "duration_min" in changes and changes["duration_min"] != service.duration_min:
        logger.info(
            f"Service {service.id} duration {service.duration_min}m → {changes['duration_min']}m "
            f"(new bookings only)"
        )

    for field, value in changes.items():
        setattr(service, field, value)

    db.commit()
    db.refresh(service)
    return service


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def deactivate_service(id: int, db: Session = Depends(get_db)):
    service = _load_service(db, id)

    service.is_active = 0
    db.commit()
    logger.info(f"Service {service.id} deactivated")
