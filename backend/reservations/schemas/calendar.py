from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CalendarEvent(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    start: datetime
    end: datetime
    all_day: bool = False


class CalendarEventListEnvelope(BaseModel):
    success: bool = True
    data: List[CalendarEvent]
