from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel

from .common import UtcDatetime


class OptionSummary(BaseModel):
    """Minimal option view used when pricing a booking."""
    id: str
    price: Decimal

    model_config = {
        "from_attributes": True
    }


class OptionResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    price: Decimal
    active: bool
    sort_order: int
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = {
        "from_attributes": True
    }


class OptionListEnvelope(BaseModel):
    success: bool = True
    data: List[OptionResponse]
