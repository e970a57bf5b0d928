"""Bookings API endpoints"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request

from eventfinder.api.deps import get_booking_service
from eventfinder.core.config import settings
from eventfinder.middleware.rate_limiter import limiter
from eventfinder.schemas import (
    ApiResponse,
    BookingCreate,
    PaymentOrder,
    PaymentOrderRequest,
    PaymentVerifyRequest,
    Registration,
    RegistrationCheck,
)
from eventfinder.services import BookingService

router = APIRouter()


@router.get("/bookings", response_model=ApiResponse[List[Registration]], response_model_exclude_none=True)
async def list_user_bookings(
    user_id: str = Query(..., min_length=1, description="Owner of the bookings"),
    service: BookingService = Depends(get_booking_service),
):
    bookings = await service.get_user_bookings(user_id)
    return ApiResponse(data=bookings, count=len(bookings))


@router.post(
    "/bookings",
    response_model=ApiResponse[Registration],
    response_model_exclude_none=True,
    status_code=201,
)
@limiter.limit(settings.BOOKING_RATE_LIMIT)
async def create_booking(
    request: Request,
    booking_data: BookingCreate,
    service: BookingService = Depends(get_booking_service),
):
    """
    Register for an event

    Free bookings are confirmed immediately. Paid bookings come back
    pending; follow with POST /bookings/pay and POST /bookings/verify.
    """
    booking = await service.register_for_event(booking_data)
    if booking.is_confirmed:
        message = "Registration confirmed"
    else:
        message = "Booking created, awaiting payment"
    return ApiResponse(data=booking, message=message)


@router.get("/bookings/check", response_model=ApiResponse[RegistrationCheck], response_model_exclude_none=True)
async def check_registration(
    event_id: str = Query(..., min_length=1),
    user_id: str = Query(..., min_length=1),
    service: BookingService = Depends(get_booking_service),
):
    """Whether the user already holds a non-cancelled booking for the event"""
    registered = await service.is_user_registered(event_id, user_id)
    return ApiResponse(data=RegistrationCheck(event_id=event_id, user_id=user_id, registered=registered))


@router.post("/bookings/pay", response_model=ApiResponse[PaymentOrder], response_model_exclude_none=True)
async def create_payment_order(
    order_request: PaymentOrderRequest,
    service: BookingService = Depends(get_booking_service),
):
    order = await service.create_payment_order(order_request.booking_id, order_request.amount)
    return ApiResponse(data=order)


@router.post("/bookings/verify", response_model=ApiResponse[Registration], response_model_exclude_none=True)
async def verify_payment(
    verify_request: PaymentVerifyRequest,
    service: BookingService = Depends(get_booking_service),
):
    """
    Confirm a paid booking

    Safe to repeat: an already-confirmed booking is returned unchanged.
    """
    booking = await service.verify_payment(
        verify_request.booking_id,
        verify_request.payment_id,
        order_id=verify_request.order_id,
        signature=verify_request.signature,
    )
    return ApiResponse(data=booking, message="Payment verified, registration confirmed")


@router.get("/bookings/{booking_id}", response_model=ApiResponse[Registration], response_model_exclude_none=True)
async def get_booking(booking_id: str, service: BookingService = Depends(get_booking_service)):
    return ApiResponse(data=await service.get_booking(booking_id))


@router.post(
    "/bookings/{booking_id}/fail",
    response_model=ApiResponse[Registration],
    response_model_exclude_none=True,
)
async def fail_payment(booking_id: str, service: BookingService = Depends(get_booking_service)):
    booking = await service.fail_payment(booking_id)
    return ApiResponse(data=booking, message="Payment failed, booking cancelled")


@router.delete("/bookings/{booking_id}", response_model=ApiResponse[Registration], response_model_exclude_none=True)
async def cancel_booking(
    booking_id: str,
    user_id: Optional[str] = Query(None, description="When given, only the owner may cancel"),
    service: BookingService = Depends(get_booking_service),
):
    booking = await service.cancel_booking(booking_id, user_id=user_id)
    return ApiResponse(data=booking, message="Registration cancelled")
