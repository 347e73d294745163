"""Booking engine: availability checks, pricing and the status lifecycle."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Callable, List, Optional

from stayhub.domain.errors import DatesUnavailable, Forbidden, NotFound, ValidationError
from stayhub.domain.models.booking import (
    BOOKING_STATUSES,
    STATUS_CONFIRMED,
    STATUS_PENDING,
    Booking,
    count_nights,
)
from stayhub.domain.timeutils import utcnow
from stayhub.infrastructure.repositories.booking_repository import BookingRepository
from stayhub.infrastructure.repositories.property_repository import PropertyRepository

logger = logging.getLogger(__name__)


class BookingService:
    """Creates bookings and lets property owners move them through their statuses.

    The bookings collection lock is held across every check-then-write so two
    requests for the same dates cannot both pass the availability check.
    """

    def __init__(
        self,
        booking_repository: BookingRepository,
        property_repository: PropertyRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._bookings = booking_repository
        self._properties = property_repository
        self._clock = clock

    def create_booking(
        self,
        property_id: str,
        user_id: str,
        check_in: datetime,
        check_out: datetime,
        guests: Any = None,
    ) -> Booking:
        listing = self._properties.get_by_id(property_id)
        if listing is None:
            raise NotFound("Property not found")
        if check_out <= check_in:
            raise ValidationError("Check-out must be after check-in")

        with self._bookings.locked():
            self._ensure_available(property_id, check_in, check_out)

            nights = count_nights(check_in, check_out)
            now = self._clock()
            booking = Booking(
                id=str(uuid.uuid4()),
                property_id=property_id,
                user_id=user_id,
                check_in=check_in,
                check_out=check_out,
                guests=_parse_guests(guests) or listing.guests,
                total_price=listing.price * nights,
                status=STATUS_CONFIRMED if listing.instant else STATUS_PENDING,
                created_at=now,
                updated_at=now,
            )
            self._bookings.save(booking)

        logger.info(
            "Booking %s created for property %s by user %s (%s nights, %s)",
            booking.id,
            property_id,
            user_id,
            nights,
            booking.status,
        )
        return booking

    def update_status(self, booking_id: str, new_status: str, requester_id: str) -> Booking:
        with self._bookings.locked():
            booking = self._bookings.get_by_id(booking_id)
            if booking is None:
                raise NotFound("Booking not found")

            listing = self._properties.get_by_id(booking.property_id)
            if listing is None or not listing.is_owned_by(requester_id):
                raise Forbidden("You do not have access to this booking")

            if new_status not in BOOKING_STATUSES:
                raise ValidationError(
                    f"Unknown booking status '{new_status}'; expected one of {', '.join(BOOKING_STATUSES)}"
                )

            if new_status == STATUS_CONFIRMED and not booking.is_confirmed():
                self._ensure_available(booking.property_id, booking.check_in, booking.check_out)

            previous = booking.status
            booking.status = new_status
            booking.updated_at = self._clock()
            self._bookings.save(booking)

        logger.info("Booking %s moved from %s to %s by owner %s", booking_id, previous, new_status, requester_id)
        return booking

    def list_user_bookings(self, user_id: str) -> List[Booking]:
        return self._bookings.list_by_user_id(user_id)

    def list_for_owner_properties(self, owner_id: str) -> List[Booking]:
        property_ids = self._properties.ids_by_owner_id(owner_id)
        if not property_ids:
            return []
        return self._bookings.list_by_property_ids(property_ids)

    def _ensure_available(self, property_id: str, check_in: datetime, check_out: datetime) -> None:
        for existing in self._bookings.list_confirmed_for_property(property_id):
            if existing.overlaps(check_in, check_out):
                logger.warning(
                    "Dates %s - %s for property %s clash with booking %s",
                    check_in.isoformat(),
                    check_out.isoformat(),
                    property_id,
                    existing.id,
                )
                raise DatesUnavailable()


def _parse_guests(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None
    return number if number > 0 else None
