"""
Multi-step event creation form rules

Step 1 - basics, step 2 - when & where, step 3 - tickets, step 4 - review.
Each validator returns {field: message}; an empty dict means the step passes.
"""
import datetime as dt
from typing import Any, Callable, Dict, Mapping

from eventfinder.schemas.event import EventCategory

FORM_STEPS = 4
_CATEGORY_VALUES = {c.value for c in EventCategory}


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _as_date(value: Any):
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str) and value:
        try:
            return dt.date.fromisoformat(value)
        except ValueError:
            return None
    return None


def _as_number(value: Any):
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def validate_basics(data: Mapping[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    if _blank(data.get("title")):
        errors["title"] = "Event title is required"
    if _blank(data.get("short_description")):
        errors["short_description"] = "Short description is required"
    if _blank(data.get("description")):
        errors["description"] = "Description is required"

    category = data.get("category")
    if _blank(category):
        errors["category"] = "Category is required"
    elif getattr(category, "value", category) not in _CATEGORY_VALUES:
        errors["category"] = "Unknown category"
    return errors


def validate_schedule(data: Mapping[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    start = _as_date(data.get("date"))
    end = _as_date(data.get("end_date"))

    if start is None:
        errors["date"] = "Start date is required"
    if end is None:
        errors["end_date"] = "End date is required"
    if start and end and start > end:
        errors["end_date"] = "End date must be after start date"

    if _blank(data.get("venue")):
        errors["venue"] = "Venue is required"
    if _blank(data.get("city")):
        errors["city"] = "City is required"
    return errors


def validate_tickets(data: Mapping[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    price = _as_number(data.get("price", 0))
    if price is None:
        errors["price"] = "Price must be a number"
    elif price < 0:
        errors["price"] = "Price cannot be negative"

    capacity = _as_number(data.get("capacity"))
    if capacity is None or capacity < 1:
        errors["capacity"] = "Capacity must be at least 1"
    elif capacity != int(capacity):
        errors["capacity"] = "Capacity must be a whole number"
    return errors


def validate_event_form(data: Mapping[str, Any]) -> Dict[str, str]:
    """Run every step; used on final submission and on the review step"""
    errors: Dict[str, str] = {}
    for validator in (validate_basics, validate_schedule, validate_tickets):
        errors.update(validator(data))
    return errors


_STEP_VALIDATORS: Dict[int, Callable[[Mapping[str, Any]], Dict[str, str]]] = {
    1: validate_basics,
    2: validate_schedule,
    3: validate_tickets,
    4: validate_event_form,
}


def validate_event_step(step: int, data: Mapping[str, Any]) -> Dict[str, str]:
    """
    Validate one step of the create-event form.

    Raises:
        ValueError: If `step` is outside 1..4.
    """
    try:
        validator = _STEP_VALIDATORS[step]
    except KeyError:
        raise ValueError(f"step must be between 1 and {FORM_STEPS}") from None
    return validator(data)
