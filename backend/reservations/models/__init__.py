from .booking_status import BookingStatus
from .option import Option
from .booking import Booking, BookingOption

__all__ = [
    "Booking",
    "BookingOption",
    "BookingStatus",
    "Option",
]
