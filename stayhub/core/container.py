from dataclasses import dataclass

from .config import Settings
from ..domain.ports.persistence import RecordStore
from ..services.access_service import AccessGate
from ..services.booking_service import BookingService
from ..services.listing_service import ListingService
from ..services.subscription_service import SubscriptionService
from ..services.user_service import UserService


@dataclass(slots=True)
class ApplicationContainer:
    """Dependency registry shared across the FastAPI application lifecycle."""

    settings: Settings
    store: RecordStore
    user_service: UserService
    subscription_service: SubscriptionService
    access_gate: AccessGate
    listing_service: ListingService
    booking_service: BookingService
