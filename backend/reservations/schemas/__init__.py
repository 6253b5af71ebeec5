from .booking import (
    BookingCreate,
    BookingPatch,
    BookingResponse,
    BookingEnvelope,
    BookingListEnvelope,
    MessageEnvelope,
)
from .option import OptionSummary, OptionResponse, OptionListEnvelope
from .calendar import CalendarEvent, CalendarEventListEnvelope
