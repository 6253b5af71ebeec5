import datetime as dt
import re
from decimal import Decimal
from typing import Annotated, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from ..models.booking_status import BookingStatus
from .common import UtcDatetime

_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def _check_name(value: str) -> str:
    if len(value) < 2:
        raise PydanticCustomError("too_short", "Naam moet minimaal 2 tekens bevatten")
    return value


def _check_email(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise PydanticCustomError("invalid_email", "Ongeldig e-mailadres")
    return value


def _check_phone(value: str) -> str:
    if len(value) < 10:
        raise PydanticCustomError("too_short", "Telefoonnummer moet minimaal 10 tekens bevatten")
    return value


def _check_option_id(value: str) -> str:
    if not _UUID_RE.match(value):
        raise PydanticCustomError("invalid_uuid", "Ongeldig reserveringstype")
    return value.lower()


def _check_option_ids(value: List[str]) -> List[str]:
    if not value:
        raise PydanticCustomError("too_small", "Selecteer minimaal één reserveringstype")
    return value


def _parse_date(value):
    if isinstance(value, dt.date) and not isinstance(value, dt.datetime):
        return value
    if not isinstance(value, str) or not value:
        raise PydanticCustomError("too_small", "Selecteer een datum")
    try:
        return dt.datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise PydanticCustomError("invalid_date", "Ongeldige datum")


def _required(message: str):
    def check(value: str) -> str:
        if not value:
            raise PydanticCustomError("too_small", message)
        return value
    return check


Name = Annotated[str, AfterValidator(_check_name)]
Email = Annotated[str, AfterValidator(_check_email)]
Phone = Annotated[str, AfterValidator(_check_phone)]
OptionId = Annotated[str, AfterValidator(_check_option_id)]
OptionIds = Annotated[List[OptionId], AfterValidator(_check_option_ids)]
ReservationDate = Annotated[dt.date, BeforeValidator(_parse_date)]
StartTime = Annotated[str, AfterValidator(_required("Selecteer een starttijd"))]
Duration = Annotated[str, AfterValidator(_required("Selecteer een duur"))]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Properties to receive on booking creation (the customer-facing form)
class BookingCreate(_CamelModel):
    name: Name
    email: Email
    phone: Phone
    reservation_type: OptionIds
    reservation_date: ReservationDate = Field(alias="date")
    start_time: StartTime
    duration: Duration
    notes: Optional[str] = None

    @field_validator("notes", mode="before")
    @classmethod
    def reject_null_notes(cls, value):
        if value is None:
            raise PydanticCustomError("null_not_allowed", "Mag niet leeg zijn")
        return value


# Partial update: every field optional, only the ones sent are checked
class BookingPatch(_CamelModel):
    name: Optional[Name] = None
    email: Optional[Email] = None
    phone: Optional[Phone] = None
    reservation_type: Optional[OptionIds] = None
    reservation_date: Optional[ReservationDate] = Field(default=None, alias="date")
    start_time: Optional[StartTime] = None
    duration: Optional[Duration] = None
    notes: Optional[str] = None

    @field_validator(
        "name",
        "email",
        "phone",
        "reservation_type",
        "reservation_date",
        "start_time",
        "duration",
        "notes",
        mode="before",
    )
    @classmethod
    def reject_explicit_null(cls, value):
        # Defaults are not validated, so this only fires for an explicit null
        if value is None:
            raise PydanticCustomError("null_not_allowed", "Mag niet leeg zijn")
        return value

    def is_set(self, field: str) -> bool:
        return field in self.model_fields_set


# Properties to return to client
class BookingResponse(_CamelModel):
    id: str
    name: str
    email: str
    phone: str
    reservation_type: List[str]
    date: str
    start_time: str = ""
    duration: str = ""
    notes: Optional[str] = None
    status: BookingStatus
    total_price: Optional[Decimal] = None
    created_at: UtcDatetime
    updated_at: UtcDatetime


class BookingEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: BookingResponse


class BookingListEnvelope(BaseModel):
    success: bool = True
    data: List[BookingResponse]


class MessageEnvelope(BaseModel):
    success: bool = True
    message: str
