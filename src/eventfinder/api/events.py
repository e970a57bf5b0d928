"""
Events API endpoints

Catalog browsing for attendees and create/update/delete for organizers.
Uses EventService for business logic.
"""
import datetime as dt
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query

from eventfinder.api.deps import get_booking_service, get_event_service
from eventfinder.schemas import (
    ApiResponse,
    Availability,
    CatalogFilterOptions,
    EventCreate,
    EventFilters,
    EventFormValidation,
    EventResponse,
    EventUpdate,
    PriceRange,
    Registration,
)
from eventfinder.services import BookingService, EventService

router = APIRouter()


@router.get("/events", response_model=ApiResponse[List[EventResponse]], response_model_exclude_none=True)
async def list_events(
    q: Optional[str] = Query(None, description="Search title, description, category, venue, city and tags"),
    category: Optional[str] = Query(None, description='Exact category, or "All Events"'),
    city: Optional[str] = Query(None, description='Exact city, or "All Cities"'),
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    date_from: Optional[dt.date] = Query(None, description="Earliest start date (inclusive)"),
    date_to: Optional[dt.date] = Query(None, description="Latest start date (inclusive)"),
    sort: Optional[str] = Query(None, description="Sort key; unknown keys keep catalog order"),
    featured: Optional[bool] = Query(None, description="true for featured events only, false to exclude them"),
    service: EventService = Depends(get_event_service),
):
    """
    List events with search, filters and sorting

    - **q**: case-insensitive substring search
    - **min_price** / **max_price**: inclusive price bounds
    - **sort**: date-asc, date-desc, price-asc, price-desc, popularity, name
    """
    price_range = None
    if min_price is not None or max_price is not None:
        price_range = PriceRange(min_price=min_price or 0, max_price=max_price)

    filters = EventFilters(
        query=q,
        category=category,
        city=city,
        price_range=price_range,
        date_from=date_from,
        date_to=date_to,
    )
    events = await service.list_events(filters, sort, featured=featured)
    now = dt.datetime.now()
    data = [EventResponse.from_event(event, now) for event in events]
    return ApiResponse(data=data, count=len(data))


@router.get("/events/featured", response_model=ApiResponse[List[EventResponse]], response_model_exclude_none=True)
async def list_featured_events(service: EventService = Depends(get_event_service)):
    events = await service.list_featured()
    now = dt.datetime.now()
    data = [EventResponse.from_event(event, now) for event in events]
    return ApiResponse(data=data, count=len(data))


@router.post("/events/validate", response_model=ApiResponse[EventFormValidation], response_model_exclude_none=True)
async def validate_event_step(
    step: int = Query(..., description="Form step, 1-4"),
    data: Dict[str, Any] = Body(...),
    service: EventService = Depends(get_event_service),
):
    """Check one step of the create-event form without saving anything"""
    result = service.validate_step(step, data)
    return ApiResponse(data=result, errors=result.errors or None)


@router.get("/events/{event_id}", response_model=ApiResponse[EventResponse], response_model_exclude_none=True)
async def get_event(event_id: str, service: EventService = Depends(get_event_service)):
    """Get event details with availability, status and display labels"""
    event = await service.get_event(event_id)
    return ApiResponse(data=EventResponse.from_event(event))


@router.get(
    "/events/{event_id}/availability",
    response_model=ApiResponse[Availability],
    response_model_exclude_none=True,
)
async def get_event_availability(event_id: str, service: EventService = Depends(get_event_service)):
    return ApiResponse(data=await service.get_availability(event_id))


@router.get(
    "/events/{event_id}/bookings",
    response_model=ApiResponse[List[Registration]],
    response_model_exclude_none=True,
)
async def list_event_bookings(event_id: str, service: BookingService = Depends(get_booking_service)):
    """All registrations for one event (organizer view)"""
    bookings = await service.get_event_bookings(event_id)
    return ApiResponse(data=bookings, count=len(bookings))


@router.post(
    "/events",
    response_model=ApiResponse[EventResponse],
    response_model_exclude_none=True,
    status_code=201,
)
async def create_event(event_data: EventCreate, service: EventService = Depends(get_event_service)):
    """
    Create an event from the organizer form

    Field problems come back as 400 with per-field messages in `errors`.
    """
    event = await service.create_event(event_data)
    return ApiResponse(data=EventResponse.from_event(event), message="Event created successfully")


@router.put("/events/{event_id}", response_model=ApiResponse[EventResponse], response_model_exclude_none=True)
async def update_event(
    event_id: str,
    event_data: EventUpdate,
    service: EventService = Depends(get_event_service),
):
    event = await service.update_event(event_id, event_data)
    return ApiResponse(data=EventResponse.from_event(event), message="Event updated successfully")


@router.delete("/events/{event_id}", response_model=ApiResponse, response_model_exclude_none=True)
async def delete_event(event_id: str, service: EventService = Depends(get_event_service)):
    await service.delete_event(event_id)
    return ApiResponse(message="Event deleted successfully")


@router.get("/catalog/filters", response_model=ApiResponse[CatalogFilterOptions], response_model_exclude_none=True)
async def get_filter_options(service: EventService = Depends(get_event_service)):
    """Categories, cities, price presets and sort keys for the filter bar"""
    return ApiResponse(data=service.filter_options())
