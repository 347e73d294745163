from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status

from ....core.dependencies import get_listing_service
from ....services.access_service import SubscribedIdentity
from ....services.listing_service import ListingService
from ...api.dependencies import require_subscriber
from ...api.schemas.property import PropertyPayload

router = APIRouter(prefix="/api/properties", tags=["properties"])


@router.get("")
def search_properties(
    kind: str = Query(default="all", alias="type"),
    q: Optional[str] = Query(default=None),
    sort: str = Query(default="popular"),
    service: ListingService = Depends(get_listing_service),
) -> List[Dict[str, Any]]:
    return [item.to_record() for item in service.search(kind=kind, query=q, sort=sort)]


# Declared before "/{property_id}" so the literal path wins.
@router.get("/my/listings")
def list_my_properties(
    caller: SubscribedIdentity = Depends(require_subscriber),
    service: ListingService = Depends(get_listing_service),
) -> List[Dict[str, Any]]:
    return [item.to_record() for item in service.list_mine(caller.user_id)]


@router.get("/{property_id}")
def get_property(
    property_id: str,
    service: ListingService = Depends(get_listing_service),
) -> Dict[str, Any]:
    return service.get(property_id).to_record()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_property(
    payload: PropertyPayload,
    caller: SubscribedIdentity = Depends(require_subscriber),
    service: ListingService = Depends(get_listing_service),
) -> Dict[str, Any]:
    item = service.create(
        caller.user_id,
        payload.model_dump(exclude_none=True),
        caller.subscription,
    )
    return {"message": "Property created", "property": item.to_record()}


@router.put("/{property_id}")
def update_property(
    property_id: str,
    payload: PropertyPayload,
    caller: SubscribedIdentity = Depends(require_subscriber),
    service: ListingService = Depends(get_listing_service),
) -> Dict[str, Any]:
    item = service.update(property_id, caller.user_id, payload.model_dump(exclude_none=True))
    return {"message": "Property updated", "property": item.to_record()}


@router.delete("/{property_id}")
def delete_property(
    property_id: str,
    caller: SubscribedIdentity = Depends(require_subscriber),
    service: ListingService = Depends(get_listing_service),
) -> Dict[str, Any]:
    service.delete(property_id, caller.user_id)
    return {"message": "Property deleted"}
