"""Repository for Property persistence."""

from typing import List, Set

from stayhub.domain.models.property import Property
from stayhub.domain.ports.persistence import PROPERTIES, RecordStore
from stayhub.infrastructure.repositories.base import CollectionRepository


class PropertyRepository(CollectionRepository[Property]):
    """Repository for managing Property entities in the record store."""

    collection = PROPERTIES

    def __init__(self, store: RecordStore):
        super().__init__(store, Property.from_record, Property.to_record)

    def list_by_owner_id(self, owner_id: str) -> List[Property]:
        return self.find(lambda item: item.owner_id == owner_id)

    def count_by_owner_id(self, owner_id: str) -> int:
        return len(self.list_by_owner_id(owner_id))

    def ids_by_owner_id(self, owner_id: str) -> Set[str]:
        return {item.id for item in self.list_by_owner_id(owner_id)}
