import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import ORJSONResponse
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.calendar import CalendarEventListEnvelope
from ..services import booking_service
from ..services.booking_transform import filter_by_reservation_type, transform_bookings
from ..services.calendar_events import bookings_to_calendar_events
from .utils import parse_query_date, request_context

logger = logging.getLogger(__name__)

router = APIRouter(tags=["calendar"], default_response_class=ORJSONResponse)


@router.get("/events", response_model=CalendarEventListEnvelope)
def read_calendar_events(
    request: Request,
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    reservation_type: Optional[List[str]] = Query(None, alias="reservationType"),
    db: Session = Depends(get_db),
) -> Any:
    """Bookings rendered as calendar events for the calendar view."""
    db_bookings = booking_service.list_bookings(
        db,
        start_date=parse_query_date(start_date, "startDate"),
        end_date=parse_query_date(end_date, "endDate"),
    )
    bookings = transform_bookings(db_bookings)
    if reservation_type:
        bookings = filter_by_reservation_type(bookings, reservation_type)
    events = bookings_to_calendar_events(bookings)
    logger.info("Fetched calendar events", extra=request_context(request, count=len(events)))
    return CalendarEventListEnvelope(data=events)
