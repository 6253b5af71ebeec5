import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import ORJSONResponse
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.option import OptionListEnvelope, OptionResponse
from ..services import booking_service
from .utils import request_context

router = APIRouter(tags=["options"], default_response_class=ORJSONResponse)
logger = logging.getLogger(__name__)


@router.get("", response_model=OptionListEnvelope)
def read_options(request: Request, db: Session = Depends(get_db)) -> Any:
    """Return every active option ordered by ``sort_order``."""
    logger.info("Fetching options", extra=request_context(request))
    options = booking_service.list_active_options(db)
    logger.info("Successfully fetched options", extra=request_context(request, count=len(options)))
    return OptionListEnvelope(data=[OptionResponse.model_validate(option) for option in options])
