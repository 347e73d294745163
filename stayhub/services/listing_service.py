from __future__ import annotations

import logging
import math
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from stayhub.domain.errors import Forbidden, NotFound, PlanLimitExceeded, ValidationError
from stayhub.domain.models.plan import BASIC_PLAN_ID, get_plan
from stayhub.domain.models.property import (
    DEFAULT_BATHROOMS,
    DEFAULT_BEDROOMS,
    DEFAULT_GUESTS,
    DEFAULT_TYPE,
    Property,
)
from stayhub.domain.models.subscription import Subscription
from stayhub.domain.timeutils import to_iso, utcnow
from stayhub.infrastructure.repositories.property_repository import PropertyRepository

logger = logging.getLogger(__name__)

SEARCH_KINDS = ("all", "apartment", "house", "luxury", "instant")
SORT_KEYS = ("popular", "price-asc", "price-desc", "rating-desc")

# Record fields an owner may change after creation.
_EDITABLE_FIELDS = (
    "title",
    "description",
    "location",
    "price",
    "type",
    "bedrooms",
    "bathrooms",
    "guests",
    "amenities",
    "images",
    "instant",
)


class ListingService:
    """Owner-side listing management plus the public catalogue."""

    def __init__(
        self,
        property_repository: PropertyRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._properties = property_repository
        self._clock = clock

    # Public catalogue -----------------------------------------------------
    def get(self, property_id: str) -> Property:
        item = self._properties.get_by_id(property_id)
        if item is None:
            raise NotFound("Property not found")
        return item

    def search(self, kind: str = "all", query: Optional[str] = None, sort: str = "popular") -> List[Property]:
        if kind not in SEARCH_KINDS:
            raise ValidationError(f"Unknown listing filter: {kind}")
        if sort not in SORT_KEYS:
            raise ValidationError(f"Unknown sort order: {sort}")

        items = self._properties.list_all()
        if kind in ("apartment", "house"):
            items = [item for item in items if item.type == kind]
        elif kind == "luxury":
            items = [item for item in items if item.premium]
        elif kind == "instant":
            items = [item for item in items if item.instant]

        needle = (query or "").strip().lower()
        if needle:
            items = [
                item for item in items
                if needle in item.location.lower() or needle in item.title.lower()
            ]
        return _sort_listings(items, sort)

    # Owner operations -----------------------------------------------------
    def create(self, owner_id: str, fields: Mapping[str, Any], subscription: Subscription) -> Property:
        title = _require_text(fields, "title")
        location = _require_text(fields, "location")
        if _is_blank(fields.get("price")):
            raise ValidationError("Price is required")
        price = _parse_price(fields.get("price"))

        with self._properties.locked():
            plan = get_plan(subscription.plan_id)
            limit = plan.listing_limit if plan else None
            if limit is not None and self._properties.count_by_owner_id(owner_id) >= limit:
                logger.warning("Owner %s hit the %s-plan listing limit", owner_id, subscription.plan_id)
                raise PlanLimitExceeded()

            now = self._clock()
            item = Property(
                id=str(uuid.uuid4()),
                owner_id=owner_id,
                title=title,
                location=location,
                price=price,
                created_at=now,
                updated_at=now,
                description=str(fields.get("description") or ""),
                type=str(fields.get("type") or DEFAULT_TYPE),
                bedrooms=_parse_count(fields.get("bedrooms"), DEFAULT_BEDROOMS),
                bathrooms=_parse_count(fields.get("bathrooms"), DEFAULT_BATHROOMS),
                guests=_parse_count(fields.get("guests"), DEFAULT_GUESTS),
                amenities=_parse_string_list(fields.get("amenities")),
                images=_parse_string_list(fields.get("images")),
                instant=bool(fields.get("instant", False)),
                premium=subscription.plan_id != BASIC_PLAN_ID,
            )
            self._properties.save(item)

        logger.info("Property %s created by owner %s (premium=%s)", item.id, owner_id, item.premium)
        return item

    def update(self, property_id: str, owner_id: str, patch: Mapping[str, Any]) -> Property:
        with self._properties.locked():
            item = self._require_owned(property_id, owner_id)
            record = item.to_record()
            record.update(_clean_patch(patch))
            record["updatedAt"] = to_iso(self._clock())
            updated = self._properties.save(Property.from_record(record))

        logger.info("Property %s updated by owner %s", property_id, owner_id)
        return updated

    def delete(self, property_id: str, owner_id: str) -> None:
        with self._properties.locked():
            self._require_owned(property_id, owner_id)
            self._properties.delete(property_id)
        logger.info("Property %s deleted by owner %s", property_id, owner_id)

    def list_mine(self, owner_id: str) -> List[Property]:
        return self._properties.list_by_owner_id(owner_id)

    def _require_owned(self, property_id: str, owner_id: str) -> Property:
        item = self._properties.get_by_id(property_id)
        if item is None:
            raise NotFound("Property not found")
        if not item.is_owned_by(owner_id):
            raise Forbidden("You do not own this property")
        return item


def _sort_listings(items: List[Property], sort: str) -> List[Property]:
    if sort == "price-asc":
        return sorted(items, key=lambda item: item.price)
    if sort == "price-desc":
        return sorted(items, key=lambda item: item.price, reverse=True)
    if sort == "rating-desc":
        return sorted(items, key=lambda item: item.rating or 0, reverse=True)
    return sorted(items, key=lambda item: item.popularity(), reverse=True)


def _clean_patch(patch: Mapping[str, Any]) -> Dict[str, Any]:
    cleaned: Dict[str, Any] = {}
    for key in _EDITABLE_FIELDS:
        if key not in patch or patch[key] is None:
            continue
        value = patch[key]
        if key in ("title", "location"):
            cleaned[key] = _require_text(patch, key)
        elif key == "price":
            cleaned[key] = _parse_price(value)
        elif key == "bedrooms":
            cleaned[key] = _parse_count(value, DEFAULT_BEDROOMS)
        elif key == "bathrooms":
            cleaned[key] = _parse_count(value, DEFAULT_BATHROOMS)
        elif key == "guests":
            cleaned[key] = _parse_count(value, DEFAULT_GUESTS)
        elif key in ("amenities", "images"):
            cleaned[key] = _parse_string_list(value)
        elif key == "instant":
            cleaned[key] = bool(value)
        else:
            cleaned[key] = str(value)
    return cleaned


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _require_text(fields: Mapping[str, Any], key: str) -> str:
    value = fields.get(key)
    if _is_blank(value):
        raise ValidationError(f"{key.capitalize()} is required")
    return str(value).strip()


def _parse_price(value: Any) -> float:
    try:
        price = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError("Price must be a number") from exc
    if not math.isfinite(price) or price < 0:
        raise ValidationError("Price must be a non-negative number")
    return price


def _parse_count(value: Any, default: int) -> int:
    """Whole-number field with a fallback for absent, non-numeric or non-positive input."""
    if isinstance(value, bool) or _is_blank(value):
        return default
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    return number if number > 0 else default


def _parse_string_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        parts: Iterable[Any] = value.split(",")
    else:
        parts = value
    seen: List[str] = []
    for part in parts:
        text = str(part).strip()
        if text and text not in seen:
            seen.append(text)
    return seen
