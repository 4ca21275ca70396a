"""
Business logic for users.

``UserService`` is a thin façade over the record store bound to the
users collection.  It adds no validation; each method forwards to a
single ``Db`` call and re-raises storage failures as
``UserServiceError`` with a message naming the operation.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.config import settings
from ..core.db import Db
from ..core.errors import StorageError, UserServiceError

logger = logging.getLogger(__name__)


class UserService:
    """Сервис для работы с пользователями.

    Both the store and the collection name can be injected, so tests
    may point the service at a temporary directory or another
    collection.
    """

    def __init__(self, db: Optional[Db] = None, collection: Optional[str] = None) -> None:
        self.db = db if db is not None else Db()
        self.collection = collection or settings.users_collection

    async def get_users(self) -> List[Dict[str, Any]]:
        """Return all users in storage order."""
        try:
            return self.db.find(self.collection)
        except StorageError as exc:
            raise UserServiceError(f"Failed to read users: {exc}") from exc

    async def get_user_by_id(self, user_id: int) -> Optional[Dict[str, Any]]:
        """Return the user with ``user_id`` or ``None`` if there is none."""
        try:
            return self.db.find_one(self.collection, {"id": user_id})
        except StorageError as exc:
            raise UserServiceError(f"Failed to find user: {exc}") from exc

    async def get_users_paginated(self, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        """Return one page of users with ``data`` and ``pagination`` keys."""
        try:
            return self.db.paginate(self.collection, page, limit)
        except StorageError as exc:
            raise UserServiceError(f"Failed to paginate users: {exc}") from exc

    async def create_user(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        """Store a new user and return it with its assigned ``id``.

        A taken ``id`` raises ``DuplicateIdError`` unchanged, so the API
        can answer with 409 instead of 500.
        """
        try:
            user = self.db.insert_one(self.collection, user_data)
        except StorageError as exc:
            raise UserServiceError(f"Failed to create user: {exc}") from exc
        logger.info("Created user %s", user["id"])
        return user

    async def update_user(self, user_id: int, update_data: Dict[str, Any]) -> int:
        """Merge ``update_data`` into the user and return the match count."""
        try:
            count = self.db.update_many(self.collection, {"id": user_id}, update_data)
        except StorageError as exc:
            raise UserServiceError(f"Failed to update user: {exc}") from exc
        logger.info("Updated user %s (%d record(s))", user_id, count)
        return count

    async def delete_user(self, user_id: int) -> int:
        """Delete the user and return the number of removed records."""
        try:
            count = self.db.delete_many(self.collection, {"id": user_id})
        except StorageError as exc:
            raise UserServiceError(f"Failed to delete user: {exc}") from exc
        logger.info("Deleted user %s (%d record(s))", user_id, count)
        return count
