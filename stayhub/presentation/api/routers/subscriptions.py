"""API router for subscription plans and the caller's subscription."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from ....core.dependencies import get_subscription_service
from ....domain.errors import ValidationError
from ....services.subscription_service import SubscriptionService
from ....services.user_service import Identity
from ...api.dependencies import require_identity
from ...api.schemas.subscription import SubscribeRequest

router = APIRouter(prefix="/api/subscriptions", tags=["subscriptions"])


@router.get("/plans")
def get_plans(
    subscription_service: SubscriptionService = Depends(get_subscription_service),
) -> List[Dict[str, Any]]:
    """Get available subscription plans."""
    return [plan.to_dict() for plan in subscription_service.list_plans()]


@router.get("/my")
def get_my_subscription(
    identity: Identity = Depends(require_identity),
    subscription_service: SubscriptionService = Depends(get_subscription_service),
) -> Dict[str, Any]:
    """Get current user subscription."""
    subscription = subscription_service.get_user_subscription(identity.user_id)
    return {"subscription": subscription.to_record() if subscription else None}


@router.post("/subscribe")
def subscribe(
    payload: SubscribeRequest,
    identity: Identity = Depends(require_identity),
    subscription_service: SubscriptionService = Depends(get_subscription_service),
) -> Dict[str, Any]:
    """Subscribe to a plan or renew the active subscription."""
    if not payload.plan_id:
        raise ValidationError("A subscription plan is required")
    subscription = subscription_service.subscribe(identity.user_id, payload.plan_id)
    return {
        "message": "Subscription activated",
        "subscription": subscription.to_record(),
    }
