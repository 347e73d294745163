"""Repository for Booking persistence."""

from typing import Collection, List

from stayhub.domain.models.booking import Booking
from stayhub.domain.ports.persistence import BOOKINGS, RecordStore
from stayhub.infrastructure.repositories.base import CollectionRepository


class BookingRepository(CollectionRepository[Booking]):
    """Repository for managing Booking entities in the record store."""

    collection = BOOKINGS

    def __init__(self, store: RecordStore):
        super().__init__(store, Booking.from_record, Booking.to_record)

    def list_confirmed_for_property(self, property_id: str) -> List[Booking]:
        return self.find(lambda item: item.property_id == property_id and item.is_confirmed())

    def list_by_user_id(self, user_id: str) -> List[Booking]:
        return self.find(lambda item: item.user_id == user_id)

    def list_by_property_ids(self, property_ids: Collection[str]) -> List[Booking]:
        return self.find(lambda item: item.property_id in property_ids)
