import enum


class BookingStatus(str, enum.Enum):
    """Lifecycle status of a reservation."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
