"""Booking mutation workflow.

Every function takes the SQLAlchemy session explicitly; the session is the
only shared resource and nothing here holds state across calls.

Create inserts the booking row and its option associations as two separate
commits. When the association insert fails the booking row is deleted again
(compensating action) so no booking is ever left without options. This is a
best-effort rollback, not a guarantee against a crash between the two steps.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date
from typing import Any, Dict, Iterator, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import crud, models
from ..schemas.booking import BookingCreate, BookingPatch
from ..schemas.option import OptionSummary
from ..utils.errors import NoValidOptionsError, NotFoundError, StorageError, describe_db_error
from .pricing import calculate_total_price

logger = logging.getLogger(__name__)

# Patch fields stored as-is on the bookings row
_SIMPLE_FIELDS = ("name", "email", "phone", "reservation_date", "notes")


@contextmanager
def storage_guard(db: Session, operation: str, **context: Any) -> Iterator[None]:
    """Convert SQLAlchemy failures into ``StorageError`` after logging them."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(
            "Storage failure during %s",
            operation,
            extra={"operation": operation, **context, **describe_db_error(exc)},
        )
        raise StorageError(operation, exc, **context) from exc


def resolve_options(db: Session, option_ids: Sequence[str]) -> List[OptionSummary]:
    """Return the active options among ``option_ids`` or raise ``NoValidOptionsError``."""
    options = crud.option.get_options_by_ids(db, option_ids)
    if not options:
        logger.info(
            "No valid options selected",
            extra={"option_ids": list(option_ids)},
        )
        raise NoValidOptionsError(option_ids)
    return options


def list_bookings(
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[models.Booking]:
    with storage_guard(
        db,
        "list_bookings",
        start_date=start_date.isoformat() if start_date else None,
        end_date=end_date.isoformat() if end_date else None,
    ):
        return crud.booking.get_bookings(db, start_date=start_date, end_date=end_date)


def get_booking(db: Session, booking_id: str, operation: str = "get_booking") -> models.Booking:
    with storage_guard(db, operation, booking_id=booking_id):
        db_booking = crud.booking.get_booking(db, booking_id)
    if db_booking is None:
        raise NotFoundError("booking", booking_id)
    return db_booking


def create_booking(db: Session, booking_in: BookingCreate) -> models.Booking:
    operation = "create_booking"
    with storage_guard(db, operation, option_ids=booking_in.reservation_type):
        options = resolve_options(db, booking_in.reservation_type)
        total_price = calculate_total_price(options)
        db_booking = crud.booking.create_booking(
            db,
            name=booking_in.name,
            email=booking_in.email,
            phone=booking_in.phone,
            reservation_date=booking_in.reservation_date,
            notes=booking_in.notes or None,
            total_price=total_price,
        )
    booking_id = db_booking.id
    option_ids = [option.id for option in options]

    try:
        crud.booking.add_booking_options(db, booking_id, option_ids)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(
            "Failed to create booking_options rows",
            extra={
                "operation": operation,
                "booking_id": booking_id,
                "option_ids": option_ids,
                **describe_db_error(exc),
            },
        )
        _remove_orphaned_booking(db, booking_id)
        raise StorageError(operation, exc, booking_id=booking_id, option_ids=option_ids) from exc

    logger.info(
        "Booking created",
        extra={"booking_id": booking_id, "option_ids": option_ids, "total_price": str(total_price)},
    )
    return get_booking(db, booking_id, operation=operation)


def _remove_orphaned_booking(db: Session, booking_id: str) -> None:
    try:
        crud.booking.delete_booking(db, booking_id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "Failed to remove booking after option insert failure",
            extra={"operation": "create_booking", "booking_id": booking_id},
        )


def update_booking(db: Session, booking_id: str, patch: BookingPatch) -> models.Booking:
    """Apply a partial update.

    Fields absent from ``patch`` are left untouched. A new option selection
    replaces the old associations entirely and recomputes the total price.
    """
    operation = "update_booking"
    db_booking = get_booking(db, booking_id, operation=operation)

    update_data: Dict[str, Any] = {}
    for field in _SIMPLE_FIELDS:
        if patch.is_set(field):
            value = getattr(patch, field)
            update_data[field] = (value or None) if field == "notes" else value

    with storage_guard(db, operation, booking_id=booking_id):
        if patch.is_set("reservation_type"):
            options = resolve_options(db, patch.reservation_type)
            update_data["total_price"] = calculate_total_price(options)
            crud.booking.replace_booking_options(db, db_booking, [option.id for option in options])

        if update_data:
            crud.booking.update_booking(db, db_booking, update_data)
        db.commit()

    if update_data:
        logger.info(
            "Booking updated",
            extra={"booking_id": booking_id, "fields": sorted(update_data)},
        )
    return get_booking(db, booking_id, operation=operation)


def delete_booking(db: Session, booking_id: str) -> None:
    operation = "delete_booking"
    get_booking(db, booking_id, operation=operation)
    with storage_guard(db, operation, booking_id=booking_id):
        crud.booking.delete_booking(db, booking_id)
    logger.info("Booking deleted", extra={"booking_id": booking_id})


def list_active_options(db: Session) -> List[models.Option]:
    with storage_guard(db, "list_options"):
        return crud.option.get_active_options(db)
