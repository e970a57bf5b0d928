"""
Catalog search, filtering and sorting

Pure functions over lists of events: nothing here touches a store or
mutates its input.
"""
import datetime as dt
import math
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from eventfinder.schemas.event import (
    ALL_CATEGORIES,
    ALL_CITIES,
    Availability,
    AvailabilityLevel,
    Event,
    EventStatus,
)
from eventfinder.schemas.filters import EventFilters, SortKey

LOW_AVAILABILITY_PERCENT = 10
MEDIUM_AVAILABILITY_PERCENT = 30


def _matches_query(event: Event, query: str) -> bool:
    needle = query.lower()
    haystacks = [
        event.title,
        event.description,
        event.category.value,
        event.venue,
        event.city,
        *event.tags,
    ]
    return any(needle in (text or "").lower() for text in haystacks)


def matches_filters(event: Event, filters: EventFilters) -> bool:
    """Check a single event against every criterion in `filters`"""
    if filters.query and not _matches_query(event, filters.query):
        return False

    if filters.category and filters.category != ALL_CATEGORIES:
        if event.category.value != filters.category:
            return False

    if filters.city and filters.city != ALL_CITIES:
        if event.city != filters.city:
            return False

    if filters.price_range and not filters.price_range.contains(event.price):
        return False

    if filters.date_from and event.date < filters.date_from:
        return False

    if filters.date_to and event.date > filters.date_to:
        return False

    return True


def filter_events(events: Iterable[Event], filters: Optional[EventFilters] = None) -> List[Event]:
    """Return the events matching `filters`, in input order"""
    if filters is None:
        return list(events)
    return [event for event in events if matches_filters(event, filters)]


# sort key -> (key function, descending)
_SORTS: Dict[SortKey, Tuple[Callable[[Event], object], bool]] = {
    SortKey.DATE_ASC: (lambda e: e.date, False),
    SortKey.DATE_DESC: (lambda e: e.date, True),
    SortKey.PRICE_ASC: (lambda e: e.price, False),
    SortKey.PRICE_DESC: (lambda e: e.price, True),
    SortKey.POPULARITY: (lambda e: e.registered, True),
    SortKey.NAME: (lambda e: e.title.casefold(), False),
}


def sort_events(events: Iterable[Event], sort_by: Union[SortKey, str, None] = None) -> List[Event]:
    """
    Return a new list ordered by `sort_by`.

    Sorting is stable, so events with equal keys keep their input order.
    An unknown or missing key returns the events unchanged.
    """
    ordered = list(events)
    if sort_by is None:
        return ordered
    try:
        key = SortKey(sort_by)
    except ValueError:
        return ordered

    key_func, descending = _SORTS[key]
    return sorted(ordered, key=key_func, reverse=descending)


def search_events(
    events: Iterable[Event],
    filters: Optional[EventFilters] = None,
    sort_by: Union[SortKey, str, None] = None,
) -> List[Event]:
    return sort_events(filter_events(events, filters), sort_by)


def get_availability(event: Event) -> Availability:
    """Remaining tickets, percentage left and a low/medium/high band"""
    if event.capacity <= 0:
        return Availability(available=0, percentage=0.0, status=AvailabilityLevel.LOW)

    available = max(0, event.capacity - event.registered)
    percentage = available / event.capacity * 100

    if percentage <= LOW_AVAILABILITY_PERCENT:
        level = AvailabilityLevel.LOW
    elif percentage <= MEDIUM_AVAILABILITY_PERCENT:
        level = AvailabilityLevel.MEDIUM
    else:
        level = AvailabilityLevel.HIGH

    return Availability(available=available, percentage=percentage, status=level)


def _parse_clock(value: str) -> Optional[dt.time]:
    try:
        hours, minutes = value.split(":")[:2]
        return dt.time(int(hours), int(minutes))
    except (ValueError, AttributeError):
        return None


def event_end(event: Event) -> dt.datetime:
    """End of the event: end date at end time, or the end of the end date"""
    end_time = _parse_clock(event.end_time) or dt.time.max
    return dt.datetime.combine(event.end_date, end_time)


def get_event_status(event: Event, now: dt.datetime) -> EventStatus:
    """Derive upcoming/today/completed from the event dates and `now`"""
    if now > event_end(event):
        return EventStatus.COMPLETED
    if event.date <= now.date() <= event.end_date:
        return EventStatus.TODAY
    return EventStatus.UPCOMING


def days_until_label(start: dt.date, now: dt.datetime) -> str:
    days = (start - now.date()).days
    if days < 0:
        return "Past"
    if days == 0:
        return "Today"
    if days == 1:
        return "Tomorrow"
    return f"{days} days"


def _group_indian(digits: str) -> str:
    # Indian grouping: last three digits, then pairs (12,34,567)
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency(amount: float) -> str:
    """Rupee display string with no decimals; zero reads as Free"""
    if amount == 0:
        return "Free"
    rounded = int(math.floor(abs(amount) + 0.5))
    sign = "-" if amount < 0 else ""
    return f"{sign}₹{_group_indian(str(rounded))}"
