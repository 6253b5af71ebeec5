"""Turn untyped request payloads into typed booking requests."""

from typing import Any, Dict, Iterable, List, Mapping

from pydantic import ValidationError as PydanticValidationError

from ..schemas.booking import BookingCreate, BookingPatch
from ..utils.errors import ValidationError

_MISSING_MESSAGE = "Verplicht veld"


def issues_from_errors(errors: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """Reduce pydantic error dicts to ``{code, path, message}`` issues.

    Only JSON-safe values are kept; ``ctx``/``input`` may hold arbitrary
    objects.
    """
    issues: List[Dict[str, Any]] = []
    for err in errors:
        code = str(err.get("type", "invalid"))
        message = _MISSING_MESSAGE if code == "missing" else str(err.get("msg", ""))
        issues.append(
            {
                "code": code,
                "path": [part if isinstance(part, int) else str(part) for part in err.get("loc", ())],
                "message": message,
            }
        )
    return issues


def _ensure_mapping(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError(
            [{"code": "invalid_type", "path": [], "message": "Verwacht een object"}]
        )
    return payload


def validate_booking_request(payload: Any) -> BookingCreate:
    """Check a full booking request; raise ``ValidationError`` on violations."""
    data = _ensure_mapping(payload)
    try:
        return BookingCreate.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(issues_from_errors(exc.errors(include_url=False))) from exc


def validate_booking_patch(payload: Any) -> BookingPatch:
    """Check only the fields present in ``payload``."""
    data = _ensure_mapping(payload)
    try:
        return BookingPatch.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(issues_from_errors(exc.errors(include_url=False))) from exc
