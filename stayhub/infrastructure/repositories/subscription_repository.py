"""Repository for Subscription persistence."""

from typing import List, Optional

from stayhub.domain.models.subscription import Subscription
from stayhub.domain.ports.persistence import SUBSCRIPTIONS, RecordStore
from stayhub.infrastructure.repositories.base import CollectionRepository


class SubscriptionRepository(CollectionRepository[Subscription]):
    """Repository for managing Subscription entities in the record store."""

    collection = SUBSCRIPTIONS

    def __init__(self, store: RecordStore):
        super().__init__(store, Subscription.from_record, Subscription.to_record)

    def get_active_by_user_id(self, user_id: str) -> Optional[Subscription]:
        """Get the user's subscription with status=active, if any."""
        for subscription in self.list_all():
            if subscription.user_id == user_id and subscription.is_active():
                return subscription
        return None

    def list_by_user_id(self, user_id: str) -> List[Subscription]:
        """List all subscriptions for a user, most recently updated first."""
        items = self.find(lambda subscription: subscription.user_id == user_id)
        return sorted(items, key=lambda subscription: subscription.updated_at, reverse=True)
