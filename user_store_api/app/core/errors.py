"""
Exception types shared by the storage and service layers.

``StorageError`` is raised by :class:`~user_store_api.app.core.db.Db`
when a collection file cannot be read, parsed or written.  Services
catch it and re-raise ``UserServiceError`` with a message describing
the operation that failed; the application turns the latter into an
HTTP 500 response.
"""


class StorageError(Exception):
    """A collection file could not be read, parsed or written."""

    def __init__(self, collection: str, message: str) -> None:
        self.collection = collection
        self.message = message
        super().__init__(f"Error accessing collection {collection}: {message}")


class UserServiceError(Exception):
    """Raised by ``UserService`` when the underlying store fails."""


class DuplicateIdError(Exception):
    """An insert carried an ``id`` that already exists in the collection."""

    def __init__(self, collection: str, record_id) -> None:
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"Record with id {record_id!r} already exists in collection {collection}")
