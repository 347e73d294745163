"""Service for the subscription plan lifecycle."""

import logging
import uuid
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from stayhub.domain.errors import InvalidPlan, SubscriptionExpired, SubscriptionRequired
from stayhub.domain.models.plan import Plan, get_plan, list_plans
from stayhub.domain.models.subscription import STATUS_ACTIVE, STATUS_EXPIRED, Subscription
from stayhub.domain.timeutils import utcnow
from stayhub.infrastructure.repositories.subscription_repository import SubscriptionRepository

logger = logging.getLogger(__name__)


class SubscriptionService:
    """Service for managing user subscriptions."""

    def __init__(
        self,
        subscription_repository: SubscriptionRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.subscription_repository = subscription_repository
        self._clock = clock

    def list_plans(self) -> List[Plan]:
        return list_plans()

    def subscribe(self, user_id: str, plan_id: str) -> Subscription:
        """
        Subscribe a user to a plan, or switch/renew their active subscription.

        An active subscription is updated in place: the period restarts from
        now, it is not added on top of the previous expiry.

        Args:
            user_id: User ID
            plan_id: Catalog plan ID

        Returns:
            The resulting Subscription

        Raises:
            InvalidPlan: If plan_id is not in the catalog
        """
        plan = get_plan(plan_id)
        if plan is None:
            raise InvalidPlan(f"Unknown subscription plan: {plan_id}")

        with self.subscription_repository.locked():
            now = self._clock()
            expires_at = now + timedelta(days=plan.duration_days)
            subscription = self.subscription_repository.get_active_by_user_id(user_id)

            if subscription:
                subscription.plan_id = plan.id
                subscription.price = plan.price
                subscription.expires_at = expires_at
                subscription.updated_at = now
                logger.info("Renewed subscription %s for user %s on plan %s", subscription.id, user_id, plan.id)
            else:
                subscription = Subscription(
                    id=str(uuid.uuid4()),
                    user_id=user_id,
                    plan_id=plan.id,
                    price=plan.price,
                    status=STATUS_ACTIVE,
                    created_at=now,
                    expires_at=expires_at,
                    updated_at=now,
                )
                logger.info("Created subscription %s for user %s on plan %s", subscription.id, user_id, plan.id)

            return self.subscription_repository.save(subscription)

    def get_user_subscription(self, user_id: str) -> Optional[Subscription]:
        """
        Get the subscription to show a user.

        Returns:
            The active subscription, else the most recently updated one, else None
        """
        active = self.subscription_repository.get_active_by_user_id(user_id)
        if active:
            return active
        history = self.subscription_repository.list_by_user_id(user_id)
        return history[0] if history else None

    def require_active(self, user_id: str) -> Subscription:
        """
        Return the user's active, unexpired subscription.

        A subscription whose period has ended is marked expired and persisted
        the first time it is checked.

        Raises:
            SubscriptionRequired: If the user never subscribed
            SubscriptionExpired: If the subscription has lapsed
        """
        with self.subscription_repository.locked():
            subscription = self.subscription_repository.get_active_by_user_id(user_id)
            if subscription is None:
                if self.subscription_repository.list_by_user_id(user_id):
                    raise SubscriptionExpired()
                raise SubscriptionRequired()

            now = self._clock()
            if subscription.has_lapsed(now):
                subscription.status = STATUS_EXPIRED
                subscription.updated_at = now
                self.subscription_repository.save(subscription)
                logger.info("Subscription %s for user %s expired at %s", subscription.id, user_id, subscription.expires_at)
                raise SubscriptionExpired()

        return subscription
