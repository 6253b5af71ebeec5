from __future__ import annotations

from datetime import datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional

from ..schemas.booking import BookingResponse
from ..schemas.calendar import CalendarEvent


def _event_title(booking: BookingResponse) -> str:
    count = len(booking.reservation_type)
    if count > 0:
        return f"{booking.name} - {count} optie(s)"
    return booking.name


def _parse_start(day: datetime, start_time: str) -> Optional[datetime]:
    try:
        hours, minutes = (int(part) for part in start_time.split(":")[:2])
        return day.replace(hour=hours, minute=minutes)
    except ValueError:
        return None


def _parse_hours(duration: str) -> Optional[Decimal]:
    try:
        hours = Decimal(duration)
    except InvalidOperation:
        return None
    return hours if hours.is_finite() and hours > 0 else None


def booking_to_calendar_event(booking: BookingResponse) -> CalendarEvent:
    """Render a booking as a calendar event.

    Timed when both start time and duration are known, all-day otherwise.
    """
    day = datetime.strptime(booking.date, "%Y-%m-%d")
    if booking.start_time and booking.duration:
        start = _parse_start(day, booking.start_time)
        hours = _parse_hours(booking.duration)
        if start is not None and hours is not None:
            return CalendarEvent(
                id=booking.id,
                title=_event_title(booking),
                start=start,
                end=start + timedelta(seconds=float(hours * 3600)),
            )

    return CalendarEvent(
        id=booking.id,
        title=_event_title(booking),
        start=datetime.combine(day.date(), time.min),
        end=datetime.combine(day.date(), time.max),
        all_day=True,
    )


def bookings_to_calendar_events(bookings: Iterable[BookingResponse]) -> List[CalendarEvent]:
    return [booking_to_calendar_event(booking) for booking in bookings]
