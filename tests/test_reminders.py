"""Appointment reminders."""
from datetime import datetime

from barbershop.models import Appointments
from barbershop.services.reminder_checker import send_due_reminders

from .conftest import pushed_events

NOW = datetime(2099, 1, 5, 8, 0)


def test_reminds_upcoming_appointments_once(db, redis, make_user, make_service, make_appointment):
    user, cut = make_user(sms_notifications=0), make_service(30)
    soon = make_appointment(user, cut, "09:00")
    later = make_appointment(user, cut, "17:00")

    assert send_due_reminders(db, redis, NOW, remind_before_minutes=120) == 1
    assert send_due_reminders(db, redis, NOW, remind_before_minutes=120) == 0

    db.expire_all()
    assert db.get(Appointments, soon.id).reminder_sent == 1
    assert db.get(Appointments, later.id).reminder_sent == 0
    events = pushed_events(redis)
    assert [(e["type"], e["appointment_id"]) for e in events] == [("appointment_reminder", soon.id)]


def test_cancelled_and_past_appointments_are_skipped(db, redis, make_user, make_service,
                                                     make_appointment):
    user, cut = make_user(), make_service(30)
    make_appointment(user, cut, "09:00", status="cancelled")
    make_appointment(user, cut, "09:30", status="completed")

    assert send_due_reminders(db, redis, datetime(2099, 1, 5, 9, 45), 1440) == 0
    redis.rpush.assert_not_called()
