from datetime import datetime

from sqlalchemy import Column, Float, ForeignKey, Index, Integer, Text, text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata


def _now() -> str:
    # Microsecond ISO text: sorts chronologically, keeps FCFS order stable
    return datetime.utcnow().isoformat()


class Users(Base):
    __tablename__ = 'users'

    first_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    role = Column(Text, nullable=False, server_default=text("'client'"))
    loyalty_points = Column(Integer, nullable=False, server_default=text('0'), default=0)
    email_notifications = Column(Integer, nullable=False, server_default=text('1'), default=1)
    sms_notifications = Column(Integer, nullable=False, server_default=text('1'), default=1)
    is_active = Column(Integer, nullable=False, server_default=text('1'), default=1)
    id = Column(Integer, primary_key=True)
    last_name = Column(Text)
    phone = Column(Text)
    created_at = Column(Text, nullable=False, default=_now)
    updated_at = Column(Text, nullable=False, default=_now, onupdate=_now)

    appointments = relationship('Appointments', back_populates='user')
    waitlist_entries = relationship('Waitlist', back_populates='user')


class Services(Base):
    __tablename__ = 'services'

    name = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    duration_min = Column(Integer, nullable=False)
    loyalty_points_earned = Column(Integer, nullable=False, server_default=text('0'), default=0)
    is_active = Column(Integer, nullable=False, server_default=text('1'), default=1)
    id = Column(Integer, primary_key=True)
    description = Column(Text)
    created_at = Column(Text, nullable=False, default=_now)
    updated_at = Column(Text, nullable=False, default=_now, onupdate=_now)

    appointments = relationship('Appointments', back_populates='service')
    waitlist_entries = relationship('Waitlist', back_populates='service')


class Appointments(Base):
    __tablename__ = 'appointments'
    __table_args__ = (
        Index('ix_appointments_date_status', 'date', 'status'),
        Index('ix_appointments_user_id', 'user_id'),
    )

    user_id = Column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    service_id = Column(ForeignKey('services.id'), nullable=False)
    date = Column(Text, nullable=False)  # YYYY-MM-DD
    time_slot = Column(Text, nullable=False)  # HH:MM
    duration_min = Column(Integer, nullable=False)  # service duration at booking time
    status = Column(Text, nullable=False, server_default=text("'confirmed'"), default='confirmed')
    reminder_sent = Column(Integer, nullable=False, server_default=text('0'), default=0)
    id = Column(Integer, primary_key=True)
    notes = Column(Text)
    created_at = Column(Text, nullable=False, default=_now)
    updated_at = Column(Text, nullable=False, default=_now, onupdate=_now)

    user = relationship('Users', back_populates='appointments')
    service = relationship('Services', back_populates='appointments')


class Waitlist(Base):
    __tablename__ = 'waitlist'
    __table_args__ = (
        Index('ix_waitlist_date_status', 'date', 'status'),
        Index('ix_waitlist_user_id', 'user_id'),
    )

    user_id = Column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    service_id = Column(ForeignKey('services.id'), nullable=False)
    date = Column(Text, nullable=False)  # YYYY-MM-DD
    preferred_time_slots = Column(Text, nullable=False, server_default=text("'[]'"), default='[]')
    status = Column(Text, nullable=False, server_default=text("'waiting'"), default='waiting')
    id = Column(Integer, primary_key=True)
    notified_at = Column(Text)
    notified_slot = Column(Text)
    created_at = Column(Text, nullable=False, default=_now)
    updated_at = Column(Text, nullable=False, default=_now, onupdate=_now)

    user = relationship('Users', back_populates='waitlist_entries')
    service = relationship('Services', back_populates='waitlist_entries')
