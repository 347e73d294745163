from __future__ import annotations

from typing import Any, ContextManager, Dict, List, Protocol, Sequence

USERS = "users"
PROPERTIES = "properties"
BOOKINGS = "bookings"
SUBSCRIPTIONS = "subscriptions"

COLLECTIONS = (USERS, PROPERTIES, BOOKINGS, SUBSCRIPTIONS)

Record = Dict[str, Any]


class RecordStore(Protocol):
    """Whole-collection storage for the marketplace's four record collections.

    ``read`` returns an empty list for a collection that was never written and
    raises ``StoreCorruptedError`` when stored data cannot be decoded. ``write``
    replaces the entire collection. Callers that read, check and write back
    must hold ``lock(collection)`` for the whole sequence.
    """

    def initialize(self) -> None:
        ...

    def read(self, collection: str) -> List[Record]:
        ...

    def write(self, collection: str, records: Sequence[Record]) -> None:
        ...

    def lock(self, collection: str) -> ContextManager[Any]:
        ...

    def close(self) -> None:
        ...


def ensure_collection(collection: str) -> str:
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection: {collection}")
    return collection
