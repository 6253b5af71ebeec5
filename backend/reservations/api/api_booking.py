# backend/reservations/api/api_booking.py

import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, status
from fastapi.responses import ORJSONResponse
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.booking import BookingEnvelope, BookingListEnvelope, MessageEnvelope
from ..services import booking_service
from ..services.booking_transform import (
    filter_by_reservation_type,
    transform_booking,
    transform_bookings,
)
from ..services.validation import validate_booking_patch, validate_booking_request
from .utils import parse_query_date, request_context

router = APIRouter(tags=["bookings"], default_response_class=ORJSONResponse)
logger = logging.getLogger(__name__)
# Note: no prefix here. main.py mounts this router at "{API_PREFIX}/bookings".


@router.get("", response_model=BookingListEnvelope, response_model_exclude_none=True)
def read_bookings(
    request: Request,
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    reservation_type: Optional[List[str]] = Query(None, alias="reservationType"),
    db: Session = Depends(get_db),
) -> Any:
    """List bookings, optionally limited to a reservation date range and option ids."""
    db_bookings = booking_service.list_bookings(
        db,
        start_date=parse_query_date(start_date, "startDate"),
        end_date=parse_query_date(end_date, "endDate"),
    )
    bookings = transform_bookings(db_bookings)
    if reservation_type:
        bookings = filter_by_reservation_type(bookings, reservation_type)
    logger.info("Fetched bookings", extra=request_context(request, count=len(bookings)))
    return BookingListEnvelope(data=bookings)


@router.post(
    "",
    response_model=BookingEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_booking(
    *,
    db: Session = Depends(get_db),
    payload: Any = Body(...),
) -> Any:
    """Create a pending booking priced from the selected options."""
    booking_in = validate_booking_request(payload)
    db_booking = booking_service.create_booking(db, booking_in)
    # TODO: create the Google Calendar event and send the confirmation email
    # once those integrations exist; google_calendar_event_id stays empty.
    return BookingEnvelope(
        message="Reservering succesvol aangemaakt",
        data=transform_booking(db_booking, booking_in),
    )


@router.get("/{booking_id}", response_model=BookingEnvelope, response_model_exclude_none=True)
def read_booking(booking_id: str, db: Session = Depends(get_db)) -> Any:
    db_booking = booking_service.get_booking(db, booking_id)
    return BookingEnvelope(data=transform_booking(db_booking))


@router.patch("/{booking_id}", response_model=BookingEnvelope, response_model_exclude_none=True)
def update_booking(
    booking_id: str,
    *,
    db: Session = Depends(get_db),
    payload: Any = Body(...),
) -> Any:
    """Partially update a booking; a new option list replaces the old one."""
    patch = validate_booking_patch(payload)
    db_booking = booking_service.update_booking(db, booking_id, patch)
    return BookingEnvelope(
        message="Reservering succesvol bijgewerkt",
        data=transform_booking(db_booking, patch),
    )


@router.delete("/{booking_id}", response_model=MessageEnvelope)
def delete_booking(booking_id: str, db: Session = Depends(get_db)) -> Any:
    booking_service.delete_booking(db, booking_id)
    return MessageEnvelope(message="Reservering succesvol verwijderd")
