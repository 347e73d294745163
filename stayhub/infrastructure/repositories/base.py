"""Shared plumbing for repositories backed by a whole-collection record store."""

import logging
from typing import Any, Callable, ContextManager, Generic, List, Optional, TypeVar

from stayhub.domain.errors import StoreCorruptedError
from stayhub.domain.ports.persistence import Record, RecordStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CollectionRepository(Generic[T]):
    """Maps one record collection to domain entities.

    Every mutation rewrites the full collection. Mutating methods take the
    collection lock themselves; services that check state before writing
    should wrap the whole sequence in ``locked()``.
    """

    collection: str = ""

    def __init__(
        self,
        store: RecordStore,
        to_entity: Callable[[Record], T],
        to_record: Callable[[T], Record],
    ):
        self.store = store
        self._to_entity = to_entity
        self._to_record = to_record

    def locked(self) -> ContextManager[Any]:
        return self.store.lock(self.collection)

    def list_all(self) -> List[T]:
        return [self._load(record) for record in self.store.read(self.collection)]

    def get_by_id(self, entity_id: str) -> Optional[T]:
        for record in self.store.read(self.collection):
            if record.get("id") == entity_id:
                return self._load(record)
        return None

    def find(self, predicate: Callable[[T], bool]) -> List[T]:
        return [entity for entity in self.list_all() if predicate(entity)]

    def save(self, entity: T) -> T:
        """Replace the record with the entity's id, or append it if new."""
        record = self._to_record(entity)
        with self.locked():
            records = self.store.read(self.collection)
            for index, existing in enumerate(records):
                if existing.get("id") == record["id"]:
                    records[index] = record
                    break
            else:
                records.append(record)
            self.store.write(self.collection, records)
        return entity

    def delete(self, entity_id: str) -> bool:
        with self.locked():
            records = self.store.read(self.collection)
            remaining = [record for record in records if record.get("id") != entity_id]
            if len(remaining) == len(records):
                return False
            self.store.write(self.collection, remaining)
        return True

    def _load(self, record: Record) -> T:
        try:
            return self._to_entity(record)
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Malformed record %r in collection %s: %s", record.get("id"), self.collection, exc)
            raise StoreCorruptedError(f"Collection '{self.collection}' holds a malformed record") from exc
