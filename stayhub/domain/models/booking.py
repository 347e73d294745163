"""Booking domain model and the stay-interval arithmetic it relies on."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict

from ..timeutils import parse_iso, to_iso

STATUS_PENDING = "pending"
STATUS_CONFIRMED = "confirmed"
STATUS_CANCELLED = "cancelled"
STATUS_REJECTED = "rejected"

BOOKING_STATUSES = (STATUS_PENDING, STATUS_CONFIRMED, STATUS_CANCELLED, STATUS_REJECTED)

_ONE_NIGHT = timedelta(days=1)


def intervals_overlap(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Half-open [start, end) overlap test; touching boundaries do not overlap."""
    return a_start < b_end and b_start < a_end


def count_nights(check_in: datetime, check_out: datetime) -> int:
    """Whole nights between two instants, rounding a partial day up."""
    return math.ceil((check_out - check_in) / _ONE_NIGHT)


@dataclass(slots=True)
class Booking:
    """
    Booking entity for a stay at a property.

    Attributes:
        id: Unique identifier
        property_id: Reference to Property
        user_id: Guest that made the booking
        check_in: Start of the stay (inclusive)
        check_out: End of the stay (exclusive)
        guests: Number of guests
        total_price: Nightly price times nights, fixed at creation
        status: pending, confirmed, cancelled or rejected
        created_at: Creation timestamp
        updated_at: Last status change
    """

    id: str
    property_id: str
    user_id: str
    check_in: datetime
    check_out: datetime
    guests: int
    total_price: float
    status: str
    created_at: datetime
    updated_at: datetime

    def is_confirmed(self) -> bool:
        return self.status == STATUS_CONFIRMED

    def overlaps(self, check_in: datetime, check_out: datetime) -> bool:
        return intervals_overlap(self.check_in, self.check_out, check_in, check_out)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Booking":
        created_at = parse_iso(record["createdAt"])
        return cls(
            id=record["id"],
            property_id=record["propertyId"],
            user_id=record["userId"],
            check_in=parse_iso(record["checkIn"]),
            check_out=parse_iso(record["checkOut"]),
            guests=int(record.get("guests", 1)),
            total_price=float(record.get("totalPrice", 0)),
            status=record.get("status", STATUS_PENDING),
            created_at=created_at,
            updated_at=parse_iso(record["updatedAt"]) if record.get("updatedAt") else created_at,
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "propertyId": self.property_id,
            "userId": self.user_id,
            "checkIn": to_iso(self.check_in),
            "checkOut": to_iso(self.check_out),
            "guests": self.guests,
            "totalPrice": self.total_price,
            "status": self.status,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }
