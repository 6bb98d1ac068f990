"""In-memory storage for user records."""

import logging
import threading
import uuid
from uuid import UUID

from user_service.app.models.user import UserEntity

logger = logging.getLogger(__name__)


class InMemoryUserRepository:
    """
    Thread-safe user store kept in process memory.

    Records are kept in insertion order. Every stored record and every record
    handed out is a copy, so callers never share state with the store and a
    reader never sees a record that is only partly written.
    """

    def __init__(self):
        """Initialize an empty repository."""
        self._lock = threading.RLock()
        self._entities: dict[UUID, UserEntity] = {}

    def find_by_id(self, user_id: UUID) -> UserEntity | None:
        """Return a copy of the stored user, or None if absent."""
        with self._lock:
            entity = self._entities.get(user_id)
            return entity.model_copy(deep=True) if entity is not None else None

    def get_page(self, page_number: int, page_size: int) -> tuple[list[UserEntity], int]:
        """
        Get one page of users.

        Args:
            page_number: 1-based page index
            page_size: Maximum number of users on the page

        Returns:
            Tuple of (users on the page, total number of users)
        """
        if page_number < 1:
            raise ValueError(f"page_number must be at least 1, got {page_number}")
        if page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {page_size}")

        start = (page_number - 1) * page_size
        with self._lock:
            total_count = len(self._entities)
            page = list(self._entities.values())[start:start + page_size]
            return [entity.model_copy(deep=True) for entity in page], total_count

    def count(self) -> int:
        """Return the number of stored users."""
        with self._lock:
            return len(self._entities)

    def insert(self, entity: UserEntity) -> UserEntity:
        """Store a new user under a freshly generated id and return it."""
        with self._lock:
            user_id = uuid.uuid4()
            while user_id in self._entities:
                user_id = uuid.uuid4()
            stored = entity.model_copy(update={"id": user_id}, deep=True)
            self._entities[user_id] = stored
            logger.debug(f"[REPOSITORY] Inserted user {user_id}")
            return stored.model_copy(deep=True)

    def update(self, entity: UserEntity) -> bool:
        """
        Replace the stored user that has the same id.

        Returns:
            False if there is no user with that id, True otherwise
        """
        if entity.id is None:
            return False
        with self._lock:
            if entity.id not in self._entities:
                return False
            self._entities[entity.id] = entity.model_copy(deep=True)
            logger.debug(f"[REPOSITORY] Updated user {entity.id}")
            return True

    def update_or_insert(self, entity: UserEntity) -> tuple[UserEntity, bool]:
        """
        Replace the user with the same id, or insert it under that id.

        Returns:
            Tuple of (stored user, True if it was inserted)
        """
        if entity.id is None:
            return self.insert(entity), True
        with self._lock:
            was_inserted = entity.id not in self._entities
            stored = entity.model_copy(deep=True)
            self._entities[entity.id] = stored
            logger.debug(
                f"[REPOSITORY] {'Inserted' if was_inserted else 'Replaced'} user {entity.id}"
            )
            return stored.model_copy(deep=True), was_inserted

    def delete(self, user_id: UUID) -> None:
        """Remove the user if present; absent ids are ignored."""
        with self._lock:
            if self._entities.pop(user_id, None) is not None:
                logger.debug(f"[REPOSITORY] Deleted user {user_id}")
