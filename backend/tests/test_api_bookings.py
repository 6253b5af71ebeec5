from datetime import datetime, timedelta
from decimal import Decimal

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from reservations.crud.crud_booking import CRUDBooking
from reservations.main import app


def _create(client, payload):
    response = client.post("/api/bookings", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_create_booking(client, options, booking_payload):
    response = client.post("/api/bookings", json=booking_payload())
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Reservering succesvol aangemaakt"
    data = body["data"]
    assert data["name"] == "John Doe"
    assert data["reservationType"] == [options["opt1"]]
    assert data["date"] == "2024-01-15"
    assert data["startTime"] == "10:00"
    assert data["duration"] == "2"
    assert data["status"] == "pending"
    assert Decimal(data["totalPrice"]) == Decimal("50")
    assert "notes" not in data
    created_at = datetime.fromisoformat(data["createdAt"].replace("Z", "+00:00"))
    assert created_at.utcoffset() == timedelta(0)


def test_create_with_invalid_email(client, options, booking_payload):
    response = client.post("/api/bookings", json=booking_payload(email="invalid-email"))
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Validatiefout"
    assert body["details"][0]["path"] == ["email"]
    assert body["details"][0]["message"] == "Ongeldig e-mailadres"


def test_create_with_no_valid_options(client, options, booking_payload):
    response = client.post(
        "/api/bookings", json=booking_payload(reservationType=[options["unknown"]])
    )
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Geen geldige opties geselecteerd"}
    assert client.get("/api/bookings").json()["data"] == []


def test_create_with_malformed_json(client, options):
    response = client.post(
        "/api/bookings",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Validatiefout"


def test_create_with_non_object_body(client, options):
    response = client.post("/api/bookings", json=["a", "b"])
    assert response.status_code == 400
    assert response.json()["details"][0]["code"] == "invalid_type"


def test_create_storage_failure_returns_localized_message(client, options, booking_payload, monkeypatch):
    def fail(self, db, booking_id, option_ids):
        raise OperationalError("INSERT INTO booking_options", {}, Exception("disk I/O error"))

    monkeypatch.setattr(CRUDBooking, "add_booking_options", fail)
    response = client.post("/api/bookings", json=booking_payload())
    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Er is een fout opgetreden bij het aanmaken van de reservering",
    }
    assert client.get("/api/bookings").json()["data"] == []


def test_get_booking(client, options, booking_payload):
    created = _create(client, booking_payload(notes="Met koffie"))
    response = client.get(f"/api/bookings/{created['id']}")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == created["id"]
    assert data["notes"] == "Met koffie"
    assert data["reservationType"] == [options["opt1"]]
    # start time and duration are not stored
    assert data["startTime"] == ""
    assert data["duration"] == ""


def test_get_missing_booking(client, options):
    response = client.get("/api/bookings/non-existent-id")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Reservering niet gevonden"}


def test_patch_replaces_options(client, options, booking_payload):
    created = _create(client, booking_payload())
    response = client.patch(
        f"/api/bookings/{created['id']}", json={"reservationType": [options["opt2"]]}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Reservering succesvol bijgewerkt"
    assert body["data"]["reservationType"] == [options["opt2"]]
    assert Decimal(body["data"]["totalPrice"]) == Decimal("100")
    assert body["data"]["name"] == "John Doe"


def test_patch_validates_present_fields_only(client, options, booking_payload):
    created = _create(client, booking_payload())
    response = client.patch(f"/api/bookings/{created['id']}", json={"email": "bad"})
    assert response.status_code == 400
    assert [d["path"] for d in response.json()["details"]] == [["email"]]

    response = client.patch(f"/api/bookings/{created['id']}", json={"name": "Jane Doe"})
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Jane Doe"


def test_patch_missing_booking(client, options):
    response = client.patch("/api/bookings/non-existent-id", json={"name": "Jane Doe"})
    assert response.status_code == 404
    assert response.json()["error"] == "Reservering niet gevonden"


def test_delete_booking(client, options, booking_payload):
    created = _create(client, booking_payload())
    response = client.delete(f"/api/bookings/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Reservering succesvol verwijderd"}
    assert client.get(f"/api/bookings/{created['id']}").status_code == 404


def test_delete_missing_booking(client, options):
    response = client.delete("/api/bookings/non-existent-id")
    assert response.status_code == 404


def test_list_is_ordered_by_reservation_date(client, options, booking_payload):
    for day in ("2024-01-20", "2024-01-10", "2024-01-15"):
        _create(client, booking_payload(date=day))
    response = client.get("/api/bookings")
    assert response.status_code == 200
    dates = [b["date"] for b in response.json()["data"]]
    assert dates == ["2024-01-10", "2024-01-15", "2024-01-20"]


def test_list_filters_by_date_range(client, options, booking_payload):
    for day in ("2024-01-20", "2024-01-10", "2024-01-15"):
        _create(client, booking_payload(date=day))
    response = client.get(
        "/api/bookings", params={"startDate": "2024-01-12", "endDate": "2024-01-20"}
    )
    assert [b["date"] for b in response.json()["data"]] == ["2024-01-15", "2024-01-20"]

    # empty values are ignored
    response = client.get("/api/bookings", params={"startDate": "", "endDate": ""})
    assert len(response.json()["data"]) == 3


def test_list_filters_by_reservation_type(client, options, booking_payload):
    _create(client, booking_payload(reservationType=[options["opt1"]]))
    both = _create(client, booking_payload(reservationType=[options["opt2"], options["opt3"]]))
    response = client.get(
        "/api/bookings", params=[("reservationType", options["opt3"]), ("reservationType", "other")]
    )
    assert [b["id"] for b in response.json()["data"]] == [both["id"]]


def test_list_rejects_invalid_query_date(client, options):
    response = client.get("/api/bookings", params={"startDate": "15-01-2024"})
    assert response.status_code == 400
    assert response.json()["details"][0]["path"] == ["query", "startDate"]


def test_list_storage_failure(client, options, monkeypatch):
    def fail(self, db, start_date=None, end_date=None):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(CRUDBooking, "get_bookings", fail)
    response = client.get("/api/bookings")
    assert response.status_code == 500
    assert response.json()["error"] == "Er is een fout opgetreden bij het ophalen van reserveringen"


def _db_error(*args, **kwargs):
    raise OperationalError("SELECT", {}, Exception("database is locked"))


def test_get_storage_failure(client, options, booking_payload, monkeypatch):
    created = _create(client, booking_payload())
    monkeypatch.setattr(CRUDBooking, "get_booking", _db_error)
    response = client.get(f"/api/bookings/{created['id']}")
    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Er is een fout opgetreden bij het ophalen van de reservering",
    }


def test_patch_storage_failure_keeps_booking(client, options, booking_payload, monkeypatch):
    created = _create(client, booking_payload(reservationType=[options["opt1"], options["opt3"]]))
    monkeypatch.setattr(CRUDBooking, "replace_booking_options", _db_error)
    response = client.patch(
        f"/api/bookings/{created['id']}",
        json={"name": "Jane Doe", "reservationType": [options["opt2"]]},
    )
    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Er is een fout opgetreden bij het bijwerken van de reservering",
    }
    monkeypatch.undo()
    stored = client.get(f"/api/bookings/{created['id']}").json()["data"]
    assert stored["name"] == "John Doe"
    assert sorted(stored["reservationType"]) == sorted([options["opt1"], options["opt3"]])
    assert Decimal(stored["totalPrice"]) == Decimal("75.50")


def test_delete_storage_failure_keeps_booking(client, options, booking_payload, monkeypatch):
    created = _create(client, booking_payload())
    monkeypatch.setattr(CRUDBooking, "delete_booking", _db_error)
    response = client.delete(f"/api/bookings/{created['id']}")
    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Er is een fout opgetreden bij het verwijderen van de reservering",
    }
    monkeypatch.undo()
    assert client.get(f"/api/bookings/{created['id']}").status_code == 200


def test_unexpected_error_returns_generic_envelope(Session, options, booking_payload, monkeypatch):
    client = TestClient(app, raise_server_exceptions=False)
    _create(client, booking_payload())

    def explode(db_bookings):
        raise RuntimeError("transform failed")

    monkeypatch.setattr("reservations.api.api_booking.transform_bookings", explode)
    response = client.get("/api/bookings")
    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Er is een onverwachte fout opgetreden"}
