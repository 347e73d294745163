"""Subscription domain model linking users to listing plans."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

from ..timeutils import parse_iso, to_iso

STATUS_ACTIVE = "active"
STATUS_EXPIRED = "expired"


@dataclass(slots=True)
class Subscription:
    """
    Subscription entity recording a user's plan.

    Attributes:
        id: Unique identifier
        user_id: Reference to User
        plan_id: Catalog plan identifier (basic, premium, enterprise)
        price: Plan price at the time of the last subscribe call
        status: "active" or "expired"
        created_at: First subscription timestamp
        expires_at: End of the current period
        updated_at: Last renewal or status change
    """

    id: str
    user_id: str
    plan_id: str
    price: float
    status: str
    created_at: datetime
    expires_at: datetime
    updated_at: datetime

    def is_active(self) -> bool:
        return self.status == STATUS_ACTIVE

    def has_lapsed(self, now: datetime) -> bool:
        """True once the period end lies in the past."""
        return self.expires_at < now

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Subscription":
        created_at = parse_iso(record["createdAt"])
        return cls(
            id=record["id"],
            user_id=record["userId"],
            plan_id=record["planId"],
            price=float(record.get("price", 0)),
            status=record.get("status", STATUS_ACTIVE),
            created_at=created_at,
            expires_at=parse_iso(record["expiresAt"]),
            updated_at=parse_iso(record["updatedAt"]) if record.get("updatedAt") else created_at,
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "planId": self.plan_id,
            "price": self.price,
            "status": self.status,
            "createdAt": to_iso(self.created_at),
            "expiresAt": to_iso(self.expires_at),
            "updatedAt": to_iso(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<Subscription id={self.id} user_id={self.user_id} plan={self.plan_id} status={self.status}>"
