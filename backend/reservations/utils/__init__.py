from .errors import (
    ReservationError,
    ValidationError,
    NotFoundError,
    NoValidOptionsError,
    StorageError,
    UnknownError,
    error_response,
)
