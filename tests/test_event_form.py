"""
Create-event form step validation tests
"""
import datetime as dt

import pytest

from eventfinder.services.event_form import (
    validate_basics,
    validate_event_form,
    validate_event_step,
    validate_schedule,
    validate_tickets,
)


@pytest.fixture
def form_data():
    start = dt.date.today() + dt.timedelta(days=10)
    return {
        "title": "Python Meetup",
        "short_description": "Monthly meetup",
        "description": "Talks and pizza",
        "category": "Technology",
        "date": start.isoformat(),
        "end_date": start.isoformat(),
        "venue": "Community Hall",
        "city": "Pune",
        "price": 0,
        "capacity": 80,
    }


def test_complete_form_passes(form_data):
    assert validate_event_form(form_data) == {}
    assert validate_event_step(4, form_data) == {}


def test_basics_requires_title_and_category(form_data):
    form_data["title"] = "   "
    form_data["category"] = ""
    errors = validate_basics(form_data)
    assert errors["title"] == "Event title is required"
    assert errors["category"] == "Category is required"


def test_basics_rejects_unknown_category(form_data):
    form_data["category"] = "Gardening"
    assert validate_basics(form_data) == {"category": "Unknown category"}


def test_schedule_end_before_start(form_data):
    form_data["end_date"] = (dt.date.fromisoformat(form_data["date"]) - dt.timedelta(days=1)).isoformat()
    assert validate_schedule(form_data) == {"end_date": "End date must be after start date"}


def test_schedule_same_day_is_allowed(form_data):
    assert validate_schedule(form_data) == {}


def test_schedule_requires_dates_venue_city(form_data):
    for field in ("date", "end_date", "venue", "city"):
        form_data.pop(field)
    assert set(validate_schedule(form_data)) == {"date", "end_date", "venue", "city"}


def test_tickets_rejects_negative_price_and_zero_capacity(form_data):
    form_data["price"] = -1
    form_data["capacity"] = 0
    errors = validate_tickets(form_data)
    assert errors["price"] == "Price cannot be negative"
    assert errors["capacity"] == "Capacity must be at least 1"


def test_tickets_rejects_fractional_capacity(form_data):
    form_data["capacity"] = "10.5"
    assert "capacity" in validate_tickets(form_data)


def test_step_only_checks_its_own_fields(form_data):
    form_data["capacity"] = 0
    assert validate_event_step(1, form_data) == {}
    assert validate_event_step(3, form_data) != {}


def test_review_step_collects_every_error():
    errors = validate_event_step(4, {})
    assert {"title", "category", "date", "venue", "capacity"} <= set(errors)


@pytest.mark.parametrize("step", [0, 5])
def test_unknown_step_raises(step, form_data):
    with pytest.raises(ValueError):
        validate_event_step(step, form_data)
