from typing import Any, Dict, List, Optional, Sequence
import logging

from fastapi import status
from fastapi.responses import ORJSONResponse

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Validatiefout"
NOT_FOUND_MESSAGE = "Reservering niet gevonden"
NO_VALID_OPTIONS_MESSAGE = "Geen geldige opties geselecteerd"
UNKNOWN_MESSAGE = "Er is een onverwachte fout opgetreden"

# Localized 500 message per workflow operation
OPERATION_MESSAGES: Dict[str, str] = {
    "list_bookings": "Er is een fout opgetreden bij het ophalen van reserveringen",
    "get_booking": "Er is een fout opgetreden bij het ophalen van de reservering",
    "create_booking": "Er is een fout opgetreden bij het aanmaken van de reservering",
    "update_booking": "Er is een fout opgetreden bij het bijwerken van de reservering",
    "delete_booking": "Er is een fout opgetreden bij het verwijderen van de reservering",
    "list_options": "Er is een fout opgetreden bij het ophalen van opties",
}


class ReservationError(Exception):
    """Base class for errors that map onto a JSON error envelope."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = UNKNOWN_MESSAGE

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    @property
    def details(self) -> Optional[List[Dict[str, Any]]]:
        return None


class ValidationError(ReservationError):
    """Input failed schema checks; ``issues`` is indexed by field path."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = VALIDATION_MESSAGE

    def __init__(self, issues: Sequence[Dict[str, Any]]) -> None:
        self.issues = list(issues)
        super().__init__()

    @property
    def details(self) -> List[Dict[str, Any]]:
        return self.issues

    @property
    def fields(self) -> List[str]:
        return [str(issue["path"][0]) for issue in self.issues if issue.get("path")]


class NotFoundError(ReservationError):
    status_code = status.HTTP_404_NOT_FOUND
    message = NOT_FOUND_MESSAGE

    def __init__(self, resource: str, identifier: str) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__()

    def __str__(self) -> str:
        return f"{self.resource} {self.identifier} not found"


class NoValidOptionsError(ReservationError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = NO_VALID_OPTIONS_MESSAGE

    def __init__(self, requested_ids: Sequence[str]) -> None:
        self.requested_ids = list(requested_ids)
        super().__init__()


class StorageError(ReservationError):
    """A persistence call failed; the client only sees the localized message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, operation: str, cause: Optional[BaseException] = None, **context: Any) -> None:
        self.operation = operation
        self.cause = cause
        self.context = context
        super().__init__(OPERATION_MESSAGES.get(operation, UNKNOWN_MESSAGE))

    def __str__(self) -> str:
        return f"{self.operation} failed: {self.cause!r}"


class UnknownError(ReservationError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = UNKNOWN_MESSAGE


def describe_db_error(exc: BaseException) -> Dict[str, Any]:
    """Return driver error code/message fields for structured logs."""
    orig = getattr(exc, "orig", None)
    code = getattr(exc, "code", None)
    if orig is not None:
        code = getattr(orig, "pgcode", None) or getattr(orig, "sqlite_errorname", None) or code
    return {
        "error_type": type(exc).__name__,
        "error_code": code,
        "error_message": str(orig if orig is not None else exc),
    }


def error_response(
    message: str,
    details: Optional[List[Dict[str, Any]]] = None,
    code: int = status.HTTP_400_BAD_REQUEST,
) -> ORJSONResponse:
    """Return a JSON error envelope with a consistent structure and log details."""
    if code >= 500:
        logger.error("%s", message, extra={"status_code": code})
    else:
        logger.warning("%s %s", message, details or "", extra={"status_code": code})
    content: Dict[str, Any] = {"success": False, "error": message}
    if details is not None:
        content["details"] = details
    return ORJSONResponse(status_code=code, content=content)
