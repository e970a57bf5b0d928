"""
API Routes Tests

Tests all endpoints against the seeded in-memory catalog:
- Events (list, filter, detail, availability, create, update, delete, form steps)
- Bookings (free and paid flows, check, fail, cancel)
- Auth (register, login, me, logout)
"""
import datetime as dt

import pytest

API = "/api/v1"


def event_payload(**overrides):
    start = dt.date.today() + dt.timedelta(days=20)
    payload = {
        "title": "PyData Pune",
        "short_description": "Data talks",
        "description": "A day of data science talks",
        "category": "Education",
        "date": start.isoformat(),
        "time": "10:00",
        "end_date": start.isoformat(),
        "end_time": "17:00",
        "venue": "Tech Park",
        "city": "Pune",
        "price": 0,
        "capacity": 5,
        "tags": "python, data",
        "highlights": ["Keynote", " "],
    }
    payload.update(overrides)
    return payload


# ============================================================================
# SERVICE
# ============================================================================
class TestServiceRoutes:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        assert client.get("/").json()["docs"] == "/docs"

    def test_trace_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Trace-ID": "trace-123"})
        assert response.headers["X-Trace-ID"] == "trace-123"

    def test_metrics(self, client):
        client.get("/health")
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "http_requests_total" in response.text
        assert "bookings_created_total" in response.text


# ============================================================================
# EVENT TESTS
# ============================================================================
class TestEventRoutes:
    """Test event-related endpoints"""

    def test_list_events(self, client):
        response = client.get(f"{API}/events")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["count"] == len(data["data"]) == 10
        first = data["data"][0]
        assert {"availability", "status", "days_until", "price_label"} <= set(first)
        assert "error" not in data

    def test_filter_by_category_and_city(self, client):
        response = client.get(f"{API}/events", params={"category": "Technology", "city": "New Delhi"})
        titles = [e["title"] for e in response.json()["data"]]
        assert titles == ["Blockchain & Web3 Summit"]

    def test_all_events_sentinel(self, client):
        everything = client.get(f"{API}/events").json()["data"]
        sentinel = client.get(f"{API}/events", params={"category": "All Events", "city": "All Cities"}).json()["data"]
        assert [e["id"] for e in sentinel] == [e["id"] for e in everything]

    def test_search_and_sort(self, client):
        response = client.get(f"{API}/events", params={"q": "summit", "sort": "price-asc"})
        prices = [e["price"] for e in response.json()["data"]]
        assert len(prices) == 2
        assert prices == sorted(prices)

    def test_free_price_filter(self, client):
        response = client.get(f"{API}/events", params={"min_price": 0, "max_price": 0})
        data = response.json()["data"]
        assert [e["id"] for e in data] == ["evt-009"]
        assert data[0]["price_label"] == "Free"

    def test_featured(self, client):
        data = client.get(f"{API}/events/featured").json()["data"]
        assert data and all(e["featured"] for e in data)

    def test_get_event(self, client):
        response = client.get(f"{API}/events/evt-001")
        assert response.status_code == 200
        event = response.json()["data"]
        assert event["status"] == "upcoming"
        assert event["price_label"] == "₹2,499"

    def test_get_missing_event(self, client):
        response = client.get(f"{API}/events/evt-nope")
        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Event not found"

    def test_availability(self, client):
        data = client.get(f"{API}/events/evt-003/availability").json()["data"]
        assert data["available"] == 8
        assert data["status"] == "medium"

    def test_filter_options(self, client):
        data = client.get(f"{API}/catalog/filters").json()["data"]
        assert data["categories"][0] == "All Events"
        assert data["cities"][0] == "All Cities"
        assert [p["label"] for p in data["price_ranges"]][:2] == ["All Prices", "Free"]
        assert "popularity" in data["sort_options"]

    def test_create_update_delete_event(self, client):
        response = client.post(f"{API}/events", json=event_payload())
        assert response.status_code == 201
        event = response.json()["data"]
        assert event["id"].startswith("evt-")
        assert event["registered"] == 0
        assert event["tags"] == ["python", "data"]
        assert event["highlights"] == ["Keynote"]
        assert event["country"] == "India"

        response = client.put(f"{API}/events/{event['id']}", json={"title": "PyData Pune 2"})
        assert response.json()["data"]["title"] == "PyData Pune 2"

        assert client.delete(f"{API}/events/{event['id']}").status_code == 200
        assert client.get(f"{API}/events/{event['id']}").status_code == 404

    def test_create_event_field_errors(self, client):
        response = client.post(f"{API}/events", json=event_payload(title="", capacity=0))
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["errors"]["title"] == "Event title is required"
        assert body["errors"]["capacity"] == "Capacity must be at least 1"

    def test_update_capacity_below_registered(self, client):
        response = client.put(f"{API}/events/evt-003", json={"capacity": 10})
        assert response.status_code == 400
        assert "capacity" in response.json()["errors"]

    def test_validate_step(self, client):
        response = client.post(f"{API}/events/validate", params={"step": 1}, json={"title": "Only a title"})
        data = response.json()["data"]
        assert data["valid"] is False
        assert "category" in data["errors"]

        response = client.post(f"{API}/events/validate", params={"step": 7}, json={})
        assert response.status_code == 400


# ============================================================================
# BOOKING TESTS
# ============================================================================
class TestBookingRoutes:
    """Test booking-related endpoints"""

    def test_free_registration_confirms(self, client):
        before = client.get(f"{API}/events/evt-009").json()["data"]["registered"]

        response = client.post(f"{API}/bookings", json={"event_id": "evt-009", "user_id": "u1", "tickets": 2})
        assert response.status_code == 201
        booking = response.json()["data"]
        assert booking["status"] == "confirmed"
        assert booking["payment_status"] == "paid"

        after = client.get(f"{API}/events/evt-009").json()["data"]["registered"]
        assert after == before + 2

        check = client.get(f"{API}/bookings/check", params={"event_id": "evt-009", "user_id": "u1"})
        assert check.json()["data"]["registered"] is True

        listed = client.get(f"{API}/bookings", params={"user_id": "u1"}).json()
        assert listed["count"] == 1

        event_bookings = client.get(f"{API}/events/evt-009/bookings").json()
        assert event_bookings["count"] == 1

    def test_paid_flow(self, client):
        response = client.post(f"{API}/bookings", json={"event_id": "evt-003", "user_id": "u2", "tickets": 2})
        booking = response.json()["data"]
        assert booking["status"] == "pending"
        assert booking["total_amount"] == 7998

        order = client.post(f"{API}/bookings/pay", json={"booking_id": booking["id"]}).json()["data"]
        assert order["amount"] == 799800

        response = client.post(f"{API}/bookings/verify", json={
            "booking_id": booking["id"],
            "payment_id": "pay_abc",
            "order_id": order["order_id"],
        })
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "confirmed"

        availability = client.get(f"{API}/events/evt-003/availability").json()["data"]
        assert availability["available"] == 6

    def test_insufficient_availability(self, client):
        response = client.post(f"{API}/bookings", json={"event_id": "evt-006", "user_id": "u3", "tickets": 3})
        assert response.status_code == 400
        assert response.json()["error"] == "Only 2 tickets available"

    def test_invalid_ticket_count(self, client):
        response = client.post(f"{API}/bookings", json={"event_id": "evt-009", "user_id": "u3", "tickets": 0})
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_fail_payment(self, client):
        booking = client.post(f"{API}/bookings", json={"event_id": "evt-003", "user_id": "u4", "tickets": 1}).json()["data"]
        response = client.post(f"{API}/bookings/{booking['id']}/fail")
        assert response.json()["data"]["payment_status"] == "failed"

        response = client.post(f"{API}/bookings/verify", json={"booking_id": booking["id"], "payment_id": "late"})
        assert response.status_code == 400

    def test_cancel_booking(self, client):
        booking = client.post(f"{API}/bookings", json={"event_id": "evt-009", "user_id": "u5", "tickets": 1}).json()["data"]
        registered = client.get(f"{API}/events/evt-009").json()["data"]["registered"]

        assert client.delete(f"{API}/bookings/{booking['id']}", params={"user_id": "u5"}).status_code == 200
        assert client.get(f"{API}/events/evt-009").json()["data"]["registered"] == registered - 1
        assert client.delete(f"{API}/bookings/{booking['id']}").status_code == 404

    def test_get_missing_booking(self, client):
        response = client.get(f"{API}/bookings/reg-missing")
        assert response.status_code == 404
        assert response.json()["error"] == "Booking not found"


# ============================================================================
# AUTH TESTS
# ============================================================================
class TestAuthRoutes:
    """Test auth endpoints"""

    def test_demo_login(self, client):
        response = client.post(f"{API}/auth/login", json={"email": "demo@eventfdr.com", "password": "demo123"})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["name"] == "Demo User"
        assert "password_hash" not in data["user"]

        me = client.get(f"{API}/auth/me", headers={"X-Session-Token": data["token"]})
        assert me.json()["data"]["email"] == "demo@eventfdr.com"

    def test_bad_credentials(self, client):
        response = client.post(f"{API}/auth/login", json={"email": "demo@eventfdr.com", "password": "nope123"})
        assert response.status_code == 401

    def test_register_update_logout(self, client):
        response = client.post(f"{API}/auth/register", json={
            "name": "Ravi", "email": "ravi@example.com", "phone": "9000000001", "password": "hunter22",
        })
        assert response.status_code == 201
        token = response.json()["data"]["token"]
        headers = {"X-Session-Token": token}

        response = client.put(f"{API}/auth/me", headers=headers, json={"name": "Ravi K"})
        assert response.json()["data"]["name"] == "Ravi K"

        assert client.post(f"{API}/auth/logout", headers=headers).status_code == 200
        assert client.get(f"{API}/auth/me", headers=headers).status_code == 401

    def test_duplicate_email(self, client):
        payload = {"name": "Demo", "email": "DEMO@eventfdr.com", "password": "another1"}
        response = client.post(f"{API}/auth/register", json=payload)
        assert response.status_code == 409

    @pytest.mark.parametrize("headers", [{}, {"X-Session-Token": "bogus"}])
    def test_me_requires_session(self, client, headers):
        assert client.get(f"{API}/auth/me", headers=headers).status_code == 401
