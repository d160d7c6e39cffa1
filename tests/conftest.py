"""Shared test fixtures."""
import json
from datetime import date
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from barbershop.database import get_db
from barbershop.main import app
from barbershop.models import Appointments, Base, Services, Users, Waitlist
from barbershop.redis_client import get_redis
from barbershop.services.slots import SchedulingConfig

# Monday, far enough ahead to never be "in the past"
BUSINESS_DAY = date(2099, 1, 5)
SATURDAY = date(2099, 1, 3)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def redis():
    """Redis stand-in: lock() yields an acquirable lock, rpush() succeeds."""
    return MagicMock()


@pytest.fixture
def config():
    return SchedulingConfig(business_start_hour=9, business_end_hour=18, slot_interval_minutes=30)


@pytest.fixture
def client(session_factory, redis):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_redis] = lambda: redis
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    counter = iter(range(1, 10_000))

    def _create(**kwargs) -> Users:
        n = next(counter)
        fields = {
            "first_name": f"Client{n}",
            "email": f"client{n}@example.com",
            "phone": f"+97250000{n:04d}",
        }
        fields.update(kwargs)
        user = Users(**fields)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _create


@pytest.fixture
def make_service(db):
    def _create(duration_min: int = 30, **kwargs) -> Services:
        fields = {"name": f"Cut {duration_min}", "price": 50.0, "duration_min": duration_min}
        fields.update(kwargs)
        service = Services(**fields)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service
    return _create


@pytest.fixture
def make_appointment(db):
    def _create(user, service, time_slot: str, target_date: date = BUSINESS_DAY,
                status: str = "confirmed", duration_min: int | None = None) -> Appointments:
        appointment = Appointments(
            user_id=user.id,
            service_id=service.id,
            date=target_date.isoformat(),
            time_slot=time_slot,
            duration_min=duration_min or service.duration_min,
            status=status,
        )
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment
    return _create


@pytest.fixture
def make_entry(db):
    def _create(user, service, preferred=None, target_date: date = BUSINESS_DAY,
                created_at: str | None = None, status: str = "waiting") -> Waitlist:
        entry = Waitlist(
            user_id=user.id,
            service_id=service.id,
            date=target_date.isoformat(),
            preferred_time_slots=json.dumps(preferred or []),
            status=status,
        )
        if created_at:
            entry.created_at = created_at
        db.add(entry)
        db.commit()
        db.refresh(entry)
        return entry
    return _create


def pushed_events(redis) -> list[dict]:
    """Events pushed through rpush, decoded."""
    return [json.loads(call.args[1]) for call in redis.rpush.call_args_list]
