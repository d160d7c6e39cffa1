"""Services and users endpoints."""
import pytest

from barbershop.models import Services, Users
from barbershop.services.slots import load_booked_intervals

from .conftest import BUSINESS_DAY


def test_service_lifecycle(client):
    resp = client.post("/services", json={
        "name": "Skin fade",
        "description": "Clipper fade",
        "price": 80,
        "durationMin": 45,
        "loyaltyPointsEarned": 5,
    })
    assert resp.status_code == 201
    service_id = resp.json()["id"]

    resp = client.patch(f"/services/{service_id}", json={"price": 90})
    assert resp.status_code == 200
    assert resp.json()["price"] == 90

    assert client.delete(f"/services/{service_id}").status_code == 204
    assert client.get(f"/services/{service_id}").json()["isActive"] is False
    assert client.get("/services").json() == []


def test_service_validation(client):
    too_short = {"name": "Trim", "price": 10, "durationMin": 4}
    negative = {"name": "Trim", "price": -1, "durationMin": 15}

    assert client.post("/services", json=too_short).status_code == 400
    assert client.post("/services", json=negative).status_code == 400


def test_services_sorted_by_price(client, make_service):
    make_service(30, name="Premium", price=120)
    make_service(15, name="Kids", price=30)

    assert [s["name"] for s in client.get("/services").json()] == ["Kids", "Premium"]


def test_unknown_service(client):
    assert client.get("/services/999").status_code == 404
    assert client.patch("/services/999", json={"price": 1}).status_code == 404


def test_user_lifecycle(client):
    resp = client.post("/users", json={
        "firstName": "Avi",
        "lastName": "Cohen",
        "email": "avi@example.com",
        "phone": "+972500000001",
    })
    assert resp.status_code == 201
    body = resp.json()
    assert body["loyaltyPoints"] == 0
    assert body["emailNotifications"] is True
    user_id = body["id"]

    resp = client.put(f"/users/{user_id}/preferences", json={"smsNotifications": False})
    assert resp.json() == {"emailNotifications": True, "smsNotifications": False}

    assert client.get(f"/users/{user_id}/loyalty-points").json() == {"loyaltyPoints": 0}

    assert client.delete(f"/users/{user_id}").status_code == 204
    assert client.get("/users").json() == []


def test_duplicate_email_rejected(client, make_user):
    user = make_user(email="taken@example.com")
    other = make_user()

    assert client.post("/users", json={"firstName": "X", "email": "taken@example.com"}).status_code == 400
    assert client.patch(f"/users/{other.id}", json={"email": "taken@example.com"}).status_code == 400
    assert client.patch(f"/users/{user.id}", json={"email": "taken@example.com"}).status_code == 200


def test_booking_accumulates_loyalty_points(client, make_user, make_service):
    user = make_user()
    cut = make_service(30, loyalty_points_earned=7)

    for time_slot in ("09:00", "10:00"):
        client.post(
            "/appointments",
            json={"serviceId": cut.id, "date": "2099-01-05", "timeSlot": time_slot},
            headers={"X-User-Id": str(user.id)},
        )

    assert client.get(f"/users/{user.id}/loyalty-points").json() == {"loyaltyPoints": 14}


def test_duration_change_does_not_move_booked_time(client, db, make_user, make_service):
    cut = make_service(30)
    for time_slot in ("10:00", "10:30"):
        resp = client.post(
            "/appointments",
            json={"serviceId": cut.id, "date": BUSINESS_DAY.isoformat(), "timeSlot": time_slot},
            headers={"X-User-Id": str(make_user().id)},
        )
        assert resp.status_code == 201
        assert resp.json()["durationMin"] == 30

    assert client.patch(f"/services/{cut.id}", json={"durationMin": 60}).status_code == 200

    booked = load_booked_intervals(db, BUSINESS_DAY)
    assert sorted((i.start, i.end) for i in booked) == [(600, 630), (630, 660)]
    assert not booked[0].overlaps(booked[1])

    slots = client.get("/available", params={"date": BUSINESS_DAY.isoformat(), "serviceId": cut.id}).json()
    assert "09:00" in slots and "11:00" in slots
    assert "09:30" not in slots and "10:30" not in slots


@pytest.mark.parametrize("field", ["name", "price", "durationMin", "loyaltyPointsEarned", "isActive"])
def test_service_required_field_cannot_be_nulled(client, db, make_service, field):
    cut = make_service(30)

    resp = client.patch(f"/services/{cut.id}", json={field: None})

    assert resp.status_code == 400
    assert resp.json()["code"] == "VALIDATION_ERROR"
    db.expire_all()
    assert db.get(Services, cut.id).name == "Cut 30"


def test_service_description_can_be_cleared(client, make_service):
    cut = make_service(30, description="Scissors only")

    resp = client.patch(f"/services/{cut.id}", json={"description": None})

    assert resp.status_code == 200
    assert resp.json()["description"] is None


@pytest.mark.parametrize("field", ["firstName", "email", "role", "isActive"])
def test_user_required_field_cannot_be_nulled(client, db, make_user, field):
    user = make_user()
    original = (user.first_name, user.email)

    resp = client.patch(f"/users/{user.id}", json={field: None})

    assert resp.status_code == 400
    db.expire_all()
    user = db.get(Users, user.id)
    assert (user.first_name, user.email) == original


def test_user_phone_can_be_cleared(client, make_user):
    user = make_user()

    resp = client.patch(f"/users/{user.id}", json={"phone": None})

    assert resp.status_code == 200
    assert resp.json()["phone"] is None


def test_not_found_bodies_carry_a_code(client):
    for path in ("/services/999", "/users/999"):
        resp = client.get(path)
        assert resp.status_code == 404
        assert resp.json()["code"] == "NOT_FOUND"
    assert client.delete("/services/999").json()["code"] == "NOT_FOUND"
