from datetime import date, datetime
from typing import Any, Dict, Optional

from fastapi import Request

from ..utils.errors import ValidationError


def request_context(request: Request, **extra: Any) -> Dict[str, Any]:
    """Structured log fields describing the inbound request."""
    return {
        "request_method": request.method,
        "request_url": str(request.url),
        **extra,
    }


def parse_query_date(value: Optional[str], name: str) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` query parameter; empty values count as absent."""
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(
            [{"code": "invalid_date", "path": ["query", name], "message": "Ongeldige datum"}]
        )
