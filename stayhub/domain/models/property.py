from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

from ..timeutils import parse_iso, to_iso

DEFAULT_TYPE = "apartment"
DEFAULT_BEDROOMS = 1
DEFAULT_BATHROOMS = 1
DEFAULT_GUESTS = 2


@dataclass(slots=True)
class Property:
    id: str
    owner_id: str
    title: str
    location: str
    price: float
    created_at: datetime
    updated_at: datetime
    description: str = ""
    type: str = DEFAULT_TYPE
    bedrooms: int = DEFAULT_BEDROOMS
    bathrooms: int = DEFAULT_BATHROOMS
    guests: int = DEFAULT_GUESTS
    amenities: List[str] = field(default_factory=list)
    images: List[str] = field(default_factory=list)
    rating: float = 0
    reviews: int = 0
    instant: bool = False
    premium: bool = False

    def is_owned_by(self, user_id: str) -> bool:
        return self.owner_id == user_id

    def popularity(self) -> float:
        return (self.rating or 0) * (self.reviews or 0)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Property":
        created_at = parse_iso(record["createdAt"])
        return cls(
            id=record["id"],
            owner_id=record["ownerId"],
            title=record.get("title", ""),
            location=record.get("location", ""),
            price=float(record.get("price", 0)),
            created_at=created_at,
            updated_at=parse_iso(record["updatedAt"]) if record.get("updatedAt") else created_at,
            description=record.get("description") or "",
            type=record.get("type") or DEFAULT_TYPE,
            bedrooms=int(record.get("bedrooms", DEFAULT_BEDROOMS)),
            bathrooms=int(record.get("bathrooms", DEFAULT_BATHROOMS)),
            guests=int(record.get("guests", DEFAULT_GUESTS)),
            amenities=list(record.get("amenities") or []),
            images=list(record.get("images") or []),
            rating=record.get("rating") or 0,
            reviews=record.get("reviews") or 0,
            instant=bool(record.get("instant", False)),
            premium=bool(record.get("premium", False)),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "ownerId": self.owner_id,
            "title": self.title,
            "description": self.description,
            "location": self.location,
            "price": self.price,
            "type": self.type,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "guests": self.guests,
            "amenities": list(self.amenities),
            "images": list(self.images),
            "rating": self.rating,
            "reviews": self.reviews,
            "instant": self.instant,
            "premium": self.premium,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }
