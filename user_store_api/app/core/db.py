"""
Flat-file record store.

Each collection is a single JSON file ``<data_dir>/<collection>.json``
holding an array of objects.  The ``Db`` class offers a small
document-collection interface (``find``, ``find_one``, ``find_many``,
``insert_one``, ``update_many``, ``delete_many`` and ``paginate``) on
top of these files.  Every call reads the whole file; mutating calls
rewrite it in a single synchronous write.

Queries are plain dictionaries: a record matches when every key of the
query is present in the record with an equal value.  There are no
operators, no nested paths and no indexes.

Mutations on the same collection are serialised with a per-collection
lock, which prevents lost updates between threads of one process.
Nothing protects the files against other processes writing the same
directory.
"""

import json
import logging
import math
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import settings
from .errors import DuplicateIdError, StorageError

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Query = Dict[str, Any]


def get_data_path() -> str:
    """Compute the directory holding the collection files.

    If ``settings.data_dir`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    data_dir = settings.data_dir
    if os.path.isabs(data_dir):
        return data_dir
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / data_dir).resolve())


def _values_equal(actual: Any, expected: Any) -> bool:
    # JSON true/false never equal a number
    if isinstance(actual, bool) != isinstance(expected, bool):
        return False
    return actual == expected


def _matches(record: Record, query: Query) -> bool:
    return all(key in record and _values_equal(record[key], value) for key, value in query.items())


def _next_id(records: List[Record]) -> int:
    ids = [
        r["id"]
        for r in records
        if isinstance(r.get("id"), int) and not isinstance(r.get("id"), bool)
    ]
    return max(ids, default=0) + 1


class Db:
    """Document-collection interface over a directory of JSON files."""

    def __init__(self, data_path: Optional[str] = None) -> None:
        self.data_path = str(data_path) if data_path is not None else get_data_path()
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    def _get_file_path(self, collection: str) -> str:
        return os.path.join(self.data_path, f"{collection}.json")

    def _collection_exists(self, collection: str) -> bool:
        return os.path.exists(self._get_file_path(collection))

    def _lock_for(self, collection: str) -> threading.RLock:
        with self._locks_guard:
            lock = self._locks.get(collection)
            if lock is None:
                lock = self._locks[collection] = threading.RLock()
            return lock

    def _write(self, collection: str, records: List[Record]) -> None:
        file_path = self._get_file_path(collection)
        try:
            os.makedirs(self.data_path, exist_ok=True)
            with open(file_path, "w", encoding="utf-8") as f:
                json.dump(records, f, ensure_ascii=False, indent=2)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Failed to write collection %s: %s", collection, exc)
            raise StorageError(collection, str(exc)) from exc
        logger.debug("Wrote %d records to %s", len(records), file_path)

    def find(self, collection: str) -> List[Record]:
        """Return every record of ``collection`` in file order.

        A missing collection file yields an empty list.  Malformed JSON,
        a top-level value that is not an array, or an I/O failure raise
        ``StorageError``.
        """
        if not self._collection_exists(collection):
            return []
        file_path = self._get_file_path(collection)
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                records = json.load(f)
        except (OSError, ValueError) as exc:
            logger.error("Failed to read collection %s: %s", collection, exc)
            raise StorageError(collection, str(exc)) from exc
        if not isinstance(records, list):
            raise StorageError(collection, "collection file does not contain a JSON array")
        if not all(isinstance(record, dict) for record in records):
            raise StorageError(collection, "collection file must contain JSON objects")
        return records

    def find_one(self, collection: str, query: Query) -> Optional[Record]:
        """Return the first record matching ``query`` or ``None``."""
        for record in self.find(collection):
            if _matches(record, query):
                return record
        return None

    def find_many(self, collection: str, query: Query) -> List[Record]:
        """Return all records matching ``query``, preserving file order."""
        return [record for record in self.find(collection) if _matches(record, query)]

    def insert_one(self, collection: str, data: Record) -> Record:
        """Append a record and return it as stored.

        ``data`` is copied; when it carries no ``id`` (or ``id`` is
        ``None``) the next integer id is assigned: one more than the
        largest integer id present, or ``1`` for an empty collection.
        A supplied ``id`` that is already taken raises ``DuplicateIdError``.
        """
        record = dict(data)
        with self._lock_for(collection):
            records = self.find(collection)
            if record.get("id") is None:
                record["id"] = _next_id(records)
            elif any(_matches(r, {"id": record["id"]}) for r in records):
                raise DuplicateIdError(collection, record["id"])
            records.append(record)
            self._write(collection, records)
        return record

    def update_many(self, collection: str, query: Query, update: Record) -> int:
        """Merge ``update`` into every matching record.

        Fields present in ``update`` overwrite the stored ones, all other
        fields are kept.  Returns the number of matched records.  The file
        is left untouched when nothing matches.
        """
        with self._lock_for(collection):
            records = self.find(collection)
            updated_count = 0
            for index, record in enumerate(records):
                if _matches(record, query):
                    records[index] = {**record, **update}
                    updated_count += 1
            if updated_count:
                self._write(collection, records)
        return updated_count

    def delete_many(self, collection: str, query: Query) -> int:
        """Remove every matching record and return how many were removed."""
        with self._lock_for(collection):
            records = self.find(collection)
            remaining = [record for record in records if not _matches(record, query)]
            deleted_count = len(records) - len(remaining)
            if deleted_count:
                self._write(collection, remaining)
        return deleted_count

    def paginate(self, collection: str, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        """Return one page of records together with pagination info.

        Pages are 1-based.  ``page`` is not clamped: values below 1 or
        past the last page produce an empty ``data`` list.
        """
        if limit < 1:
            raise ValueError("limit must be a positive integer")
        records = self.find(collection)
        total = len(records)
        if page < 1:
            data: List[Record] = []
        else:
            start = (page - 1) * limit
            data = records[start:start + limit]
        return {
            "data": data,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "totalPages": math.ceil(total / limit),
            },
        }
