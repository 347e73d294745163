"""Domain error taxonomy surfaced to API callers."""


class MarketplaceError(Exception):
    """Base class for every user-visible failure raised by the services."""

    status_code = 400
    code = "error"
    default_message = "Request failed"

    def __init__(self, message: str = "") -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(MarketplaceError):
    status_code = 401
    code = "unauthenticated"
    default_message = "Access token is missing"


class Forbidden(MarketplaceError):
    status_code = 403
    code = "forbidden"
    default_message = "Access denied"


class SubscriptionRequired(MarketplaceError):
    status_code = 403
    code = "subscription_required"
    default_message = "An active subscription is required for this operation"


class SubscriptionExpired(MarketplaceError):
    status_code = 403
    code = "subscription_expired"
    default_message = "Your subscription has expired, please renew it"


class ValidationError(MarketplaceError):
    status_code = 400
    code = "validation_error"
    default_message = "Invalid request"


class PlanLimitExceeded(MarketplaceError):
    status_code = 403
    code = "plan_limit_exceeded"
    default_message = "Listing limit reached for the basic plan, upgrade your subscription"


class DatesUnavailable(MarketplaceError):
    status_code = 409
    code = "dates_unavailable"
    default_message = "Selected dates are not available"


class NotFound(MarketplaceError):
    status_code = 404
    code = "not_found"
    default_message = "Not found"


class InvalidPlan(MarketplaceError):
    status_code = 400
    code = "invalid_plan"
    default_message = "Unknown subscription plan"


class StoreCorruptedError(MarketplaceError):
    """A collection exists on disk but its contents cannot be decoded."""

    status_code = 500
    code = "store_corrupted"
    default_message = "Stored data is unreadable"
