"""Domain models for the StayHub marketplace."""

from .booking import Booking
from .plan import Plan
from .property import Property
from .subscription import Subscription
from .user import User

__all__ = [
    "Booking",
    "Plan",
    "Property",
    "Subscription",
    "User",
]
