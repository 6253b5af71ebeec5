from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence

from .. import models
from ..schemas.booking import BookingCreate, BookingPatch, BookingResponse


def _format_date(value) -> str:
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    return datetime.fromisoformat(str(value)).strftime("%Y-%m-%d")


def transform_booking(
    db_booking: models.Booking,
    request: Optional[BookingCreate | BookingPatch] = None,
) -> BookingResponse:
    """Map a stored booking onto the camelCase API shape.

    Start time and duration are not persisted; they are echoed from
    ``request`` when given and left empty otherwise.
    """
    return BookingResponse(
        id=db_booking.id,
        name=db_booking.name,
        email=db_booking.email,
        phone=db_booking.phone,
        reservation_type=[option.id for option in db_booking.options],
        date=_format_date(db_booking.reservation_date),
        start_time=(getattr(request, "start_time", None) or "") if request else "",
        duration=(getattr(request, "duration", None) or "") if request else "",
        notes=db_booking.notes or None,
        status=db_booking.status,
        total_price=db_booking.total_price,
        created_at=db_booking.created_at,
        updated_at=db_booking.updated_at,
    )


def transform_bookings(db_bookings: Iterable[models.Booking]) -> List[BookingResponse]:
    return [transform_booking(db_booking) for db_booking in db_bookings]


def filter_by_reservation_type(
    bookings: Iterable[BookingResponse], reservation_types: Sequence[str]
) -> List[BookingResponse]:
    """Keep bookings that share at least one option id with ``reservation_types``."""
    wanted = set(reservation_types)
    return [booking for booking in bookings if wanted.intersection(booking.reservation_type)]
