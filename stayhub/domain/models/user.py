"""User domain model for marketplace accounts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

from ..timeutils import parse_iso, to_iso


@dataclass(slots=True)
class User:
    """
    User entity representing a guest or host account.

    Attributes:
        id: Unique identifier (UUID string)
        email: User email address (unique, stored lower-cased)
        password_hash: bcrypt hash of the password
        name: Display name
        role: Account role, "user" for every self-registered account
        created_at: Registration timestamp
    """

    id: str
    email: str
    password_hash: str
    name: str
    role: str
    created_at: datetime

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "User":
        return cls(
            id=record["id"],
            email=record["email"],
            password_hash=record["password"],
            name=record.get("name", ""),
            role=record.get("role", "user"),
            created_at=parse_iso(record["createdAt"]),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "password": self.password_hash,
            "name": self.name,
            "role": self.role,
            "createdAt": to_iso(self.created_at),
        }

    def public_view(self) -> Dict[str, Any]:
        return {"id": self.id, "email": self.email, "name": self.name, "role": self.role}
