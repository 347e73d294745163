from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, status

from ....core.dependencies import get_booking_service
from ....domain.errors import ValidationError
from ....domain.timeutils import parse_iso
from ....services.access_service import SubscribedIdentity
from ....services.booking_service import BookingService
from ....services.user_service import Identity
from ...api.dependencies import require_identity, require_subscriber
from ...api.schemas.booking import BookingCreatePayload, BookingStatusPayload

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreatePayload,
    identity: Identity = Depends(require_identity),
    service: BookingService = Depends(get_booking_service),
) -> Dict[str, Any]:
    if not payload.property_id or not payload.check_in or not payload.check_out:
        raise ValidationError("propertyId, checkIn and checkOut are required")
    booking = service.create_booking(
        property_id=payload.property_id,
        user_id=identity.user_id,
        check_in=_parse_instant(payload.check_in, "checkIn"),
        check_out=_parse_instant(payload.check_out, "checkOut"),
        guests=payload.guests,
    )
    return {"message": "Booking created", "booking": booking.to_record()}


@router.get("/my")
def list_my_bookings(
    identity: Identity = Depends(require_identity),
    service: BookingService = Depends(get_booking_service),
) -> List[Dict[str, Any]]:
    return [booking.to_record() for booking in service.list_user_bookings(identity.user_id)]


@router.get("/my/properties")
def list_bookings_for_my_properties(
    caller: SubscribedIdentity = Depends(require_subscriber),
    service: BookingService = Depends(get_booking_service),
) -> List[Dict[str, Any]]:
    return [booking.to_record() for booking in service.list_for_owner_properties(caller.user_id)]


@router.put("/{booking_id}/status")
def update_booking_status(
    booking_id: str,
    payload: BookingStatusPayload,
    caller: SubscribedIdentity = Depends(require_subscriber),
    service: BookingService = Depends(get_booking_service),
) -> Dict[str, Any]:
    booking = service.update_status(booking_id, payload.status or "", caller.user_id)
    return {"message": "Booking status updated", "booking": booking.to_record()}


def _parse_instant(value: Optional[str], field: str) -> datetime:
    try:
        return parse_iso(value or "")
    except ValueError as exc:
        raise ValidationError(f"{field} must be an ISO-8601 date or timestamp") from exc
