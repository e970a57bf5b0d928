"""
Event Service - catalog reads and organizer writes
"""
import logging
from typing import Any, Dict, List, Optional

import pydantic

from eventfinder.core.config import settings
from eventfinder.core.exceptions import EventNotFoundError, ValidationError
from eventfinder.core.security import new_id
from eventfinder.data.seed_events import CITIES, EVENT_CATEGORIES, PRICE_RANGES, SORT_OPTIONS
from eventfinder.schemas.event import (
    ALL_CATEGORIES,
    Availability,
    Event,
    EventCreate,
    EventFormValidation,
    EventUpdate,
)
from eventfinder.schemas.filters import CatalogFilterOptions, EventFilters
from eventfinder.services.event_filters import get_availability, search_events
from eventfinder.services.event_form import validate_event_form, validate_event_step
from eventfinder.stores.interfaces import EventStore

logger = logging.getLogger(__name__)


class EventService:
    """Service for browsing and managing events"""

    def __init__(self, store: EventStore):
        self.store = store

    async def list_events(
        self,
        filters: Optional[EventFilters] = None,
        sort_by: Optional[str] = None,
        featured: Optional[bool] = None,
    ) -> List[Event]:
        """
        List events matching `filters`, ordered by `sort_by`.

        A concrete category narrows the store read before the in-memory
        filters run. `featured` true keeps only featured events; false
        drops them.
        """
        if featured:
            events = await self.store.list_featured()
        elif filters and filters.category and filters.category != ALL_CATEGORIES:
            events = await self.store.list_by_category(filters.category)
        else:
            events = await self.store.list_events()
        if featured is False:
            events = [event for event in events if not event.featured]
        return search_events(events, filters, sort_by)

    async def list_featured(self) -> List[Event]:
        return await self.store.list_featured()

    async def get_event(self, event_id: str) -> Event:
        event = await self.store.get_event(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    async def get_availability(self, event_id: str) -> Availability:
        return get_availability(await self.get_event(event_id))

    async def create_event(self, data: EventCreate) -> Event:
        """Validate a form submission and add it to the catalog"""
        values = data.model_dump()
        errors = validate_event_form(values)
        if errors:
            raise ValidationError("Please fix the highlighted fields", errors=errors)

        event = Event(
            id=new_id("evt"),
            title=data.title.strip(),
            short_description=data.short_description.strip(),
            description=data.description.strip(),
            category=data.category,
            date=data.date,
            time=data.time,
            end_date=data.end_date,
            end_time=data.end_time,
            venue=data.venue.strip(),
            address=data.address,
            city=data.city.strip(),
            country=data.country or settings.DEFAULT_COUNTRY,
            image=data.image or settings.DEFAULT_EVENT_IMAGE,
            price=data.price,
            currency=data.currency or settings.DEFAULT_CURRENCY,
            capacity=int(data.capacity),
            registered=0,
            organizer=data.organizer or {},
            tags=data.tags,
            featured=data.featured,
            highlights=data.highlights,
            schedule=data.schedule,
        )
        created = await self.store.add_event(event)
        logger.info(f"✅ Created event {created.title}", extra={"event_id": created.id})
        return created

    async def update_event(self, event_id: str, data: EventUpdate) -> Event:
        current = await self.get_event(event_id)
        changes: Dict[str, Any] = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            return current

        merged = {**current.model_dump(), **changes}
        errors = validate_event_form(merged)
        if int(merged["capacity"]) < current.registered:
            errors["capacity"] = f"Capacity cannot be below the {current.registered} tickets already sold"
        if errors:
            raise ValidationError("Please fix the highlighted fields", errors=errors)

        try:
            updated = await self.store.update_event(event_id, changes)
        except pydantic.ValidationError as e:
            # Tickets were confirmed between the check above and the write
            latest = await self.get_event(event_id)
            raise ValidationError(
                "Please fix the highlighted fields",
                errors={"capacity": f"Capacity cannot be below the {latest.registered} tickets already sold"},
            ) from e
        if updated is None:
            raise EventNotFoundError(event_id)
        logger.info(f"✏️ Updated event {event_id}", extra={"event_id": event_id})
        return updated

    async def delete_event(self, event_id: str) -> None:
        if not await self.store.delete_event(event_id):
            raise EventNotFoundError(event_id)
        logger.info(f"🗑️ Deleted event {event_id}", extra={"event_id": event_id})

    @staticmethod
    def validate_step(step: int, data: Dict[str, Any]) -> EventFormValidation:
        try:
            errors = validate_event_step(step, data)
        except ValueError as e:
            raise ValidationError(str(e), errors={"step": str(e)})
        return EventFormValidation(step=step, valid=not errors, errors=errors)

    @staticmethod
    def filter_options() -> CatalogFilterOptions:
        return CatalogFilterOptions(
            categories=EVENT_CATEGORIES,
            cities=CITIES,
            price_ranges=PRICE_RANGES,
            sort_options=SORT_OPTIONS,
        )
