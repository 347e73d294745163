"""Static subscription plan catalog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

BASIC_PLAN_ID = "basic"
BASIC_LISTING_LIMIT = 3


@dataclass(frozen=True, slots=True)
class Plan:
    id: str
    name: str
    price: float
    duration_days: int
    features: Tuple[str, ...]

    @property
    def listing_limit(self) -> Optional[int]:
        """Only the basic plan caps the number of listings."""
        return BASIC_LISTING_LIMIT if self.id == BASIC_PLAN_ID else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "duration": self.duration_days,
            "features": list(self.features),
        }


PLAN_CATALOG: Tuple[Plan, ...] = (
    Plan(
        id=BASIC_PLAN_ID,
        name="Basic",
        price=9.99,
        duration_days=30,
        features=(
            "Up to 3 listings",
            "Basic statistics",
            "Email support",
        ),
    ),
    Plan(
        id="premium",
        name="Premium",
        price=19.99,
        duration_days=30,
        features=(
            "Unlimited listings",
            "Extended statistics",
            "Priority support",
            "Promotion in search",
        ),
    ),
    Plan(
        id="enterprise",
        name="Enterprise",
        price=49.99,
        duration_days=30,
        features=(
            "Everything in Premium",
            "API access",
            "Personal manager",
            "Custom integrations",
        ),
    ),
)

_PLANS_BY_ID: Dict[str, Plan] = {plan.id: plan for plan in PLAN_CATALOG}


def get_plan(plan_id: str) -> Optional[Plan]:
    return _PLANS_BY_ID.get(plan_id)


def list_plans() -> List[Plan]:
    return list(PLAN_CATALOG)
