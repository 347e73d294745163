"""Per-request identity resolution and subscription gating."""

import logging
from dataclasses import dataclass
from typing import Optional

from stayhub.domain.errors import SubscriptionExpired, SubscriptionRequired
from stayhub.domain.models.subscription import Subscription
from stayhub.services.subscription_service import SubscriptionService
from stayhub.services.user_service import Identity, UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SubscribedIdentity:
    """An authenticated caller together with the subscription that admitted them."""

    identity: Identity
    subscription: Subscription

    @property
    def user_id(self) -> str:
        return self.identity.user_id


class AccessGate:
    """Composes authentication and the subscription check for protected operations.

    Nothing is cached between calls: every request re-verifies its token and
    re-reads the subscription collection.
    """

    def __init__(self, user_service: UserService, subscription_service: SubscriptionService) -> None:
        self._users = user_service
        self._subscriptions = subscription_service

    def authenticate(self, token: Optional[str]) -> Identity:
        return self._users.resolve_identity(token)

    def require_subscription(self, identity: Identity) -> SubscribedIdentity:
        try:
            subscription = self._subscriptions.require_active(identity.user_id)
        except (SubscriptionRequired, SubscriptionExpired) as exc:
            logger.warning("Subscription gate rejected user %s: %s", identity.user_id, exc.code)
            raise
        return SubscribedIdentity(identity=identity, subscription=subscription)
