"""Repository for User persistence."""

import uuid
from typing import Optional

from stayhub.domain.models.user import User
from stayhub.domain.ports.persistence import USERS, RecordStore
from stayhub.domain.timeutils import utcnow
from stayhub.infrastructure.repositories.base import CollectionRepository


class UserRepository(CollectionRepository[User]):
    """Repository for managing User entities in the record store."""

    collection = USERS

    def __init__(self, store: RecordStore):
        super().__init__(store, User.from_record, User.to_record)

    def create(self, email: str, password_hash: str, name: str, role: str = "user") -> User:
        """Create a new user."""
        user = User(
            id=str(uuid.uuid4()),
            email=email,
            password_hash=password_hash,
            name=name,
            role=role,
            created_at=utcnow(),
        )
        return self.save(user)

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)."""
        wanted = email.strip().lower()
        for user in self.list_all():
            if user.email.lower() == wanted:
                return user
        return None
