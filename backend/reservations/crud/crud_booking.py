from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session, selectinload

from .. import models
from ..models.booking_status import BookingStatus


def _with_options(query):
    return query.options(
        selectinload(models.Booking.booking_options).selectinload(models.BookingOption.option)
    )


class CRUDBooking:
    def get_booking(self, db: Session, booking_id: str) -> Optional[models.Booking]:
        return (
            _with_options(db.query(models.Booking))
            .filter(models.Booking.id == booking_id)
            .populate_existing()
            .first()
        )

    def get_bookings(
        self,
        db: Session,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[models.Booking]:
        query = _with_options(db.query(models.Booking))
        if start_date is not None:
            query = query.filter(models.Booking.reservation_date >= start_date)
        if end_date is not None:
            query = query.filter(models.Booking.reservation_date <= end_date)
        return (
            query.order_by(
                models.Booking.reservation_date.asc(),
                models.Booking.created_at.desc(),
            )
            .all()
        )

    def create_booking(
        self,
        db: Session,
        *,
        name: str,
        email: str,
        phone: str,
        reservation_date: date,
        notes: Optional[str],
        total_price: Decimal,
    ) -> models.Booking:
        db_booking = models.Booking(
            name=name,
            email=email,
            phone=phone,
            reservation_date=reservation_date,
            status=BookingStatus.PENDING,
            notes=notes,
            total_price=total_price,
        )
        db.add(db_booking)
        db.commit()
        db.refresh(db_booking)
        return db_booking

    def add_booking_options(self, db: Session, booking_id: str, option_ids: Sequence[str]) -> None:
        db.add_all(
            [models.BookingOption(booking_id=booking_id, option_id=option_id) for option_id in option_ids]
        )
        db.commit()

    def replace_booking_options(
        self, db: Session, db_booking: models.Booking, option_ids: Sequence[str]
    ) -> None:
        """Delete every association of ``db_booking`` then insert ``option_ids``.

        Nothing is committed; the caller owns the transaction.
        """
        db_booking.booking_options.clear()
        db.flush()
        db_booking.booking_options.extend(
            models.BookingOption(option_id=option_id) for option_id in option_ids
        )
        db.flush()

    def update_booking(
        self, db: Session, db_booking: models.Booking, update_data: Dict[str, Any]
    ) -> models.Booking:
        for key, value in update_data.items():
            setattr(db_booking, key, value)
        db.flush()
        return db_booking

    def delete_booking(self, db: Session, booking_id: str) -> int:
        # Bulk delete so the booking_options rows go through ON DELETE CASCADE
        deleted = (
            db.query(models.Booking)
            .filter(models.Booking.id == booking_id)
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted


booking = CRUDBooking()
