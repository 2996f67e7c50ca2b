"""
Record Store - collection name -> ordered list of records.

Every service reads and writes through a RecordStore, never through a
backend directly. Records are plain JSON-compatible dicts carrying their
own "id" field.

Backends:
- MemoryRecordStore: process-local, used by tests
- JsonFileRecordStore: one JSON file on disk, rewritten on commit
- MongoRecordStore (db/mongodb.py): one MongoDB collection per record collection

Transactions:
    with store.transaction():
        ...load, mutate, store...

hold a re-entrant lock for the whole read-modify-write cycle, so two
requests can never interleave on the same data. Memory and JSON stores
also roll back every collection if the block (or the commit itself)
raises. Callbacks registered with after_commit() run once the outermost
transaction has committed and are dropped on rollback.
"""

import copy
import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)

# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
    "opportunities": "opportunities",
    "events": "events",
    "applications": "applications",
    "notifications": "notifications",
}


class DuplicateRecord(ValueError):
    """Insert with an id (or unique key) that is already stored."""


class RecordStore:
    """
    Base class for all backends.

    Subclasses implement the six primitive operations; locking and
    transaction nesting live here.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._depth = 0
        self._after_commit: List[Callable[[], None]] = []

    # ------------------------------------------------------------
    # primitives
    # ------------------------------------------------------------

    def all(self, collection: str) -> List[dict]:
        raise NotImplementedError

    def get(self, collection: str, record_id: str) -> Optional[dict]:
        raise NotImplementedError

    def insert(self, collection: str, record: dict) -> None:
        raise NotImplementedError

    def replace(self, collection: str, record_id: str, record: dict) -> bool:
        raise NotImplementedError

    def delete(self, collection: str, record_id: str) -> bool:
        raise NotImplementedError

    def find(self, collection: str, **filters: Any) -> List[dict]:
        """Equality match on top-level fields, insertion order."""
        return [
            record for record in self.all(collection)
            if all(record.get(key) == value for key, value in filters.items())
        ]

    # ------------------------------------------------------------
    # transactions
    # ------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator["RecordStore"]:
        with self._lock:
            outermost = self._depth == 0
            if outermost:
                self._begin()
            self._depth += 1
            try:
                yield self
            except BaseException:
                self._depth -= 1
                if outermost:
                    self._abort()
                raise
            else:
                self._depth -= 1
                if outermost:
                    try:
                        self._commit()
                    except BaseException:
                        logger.error("Record store commit failed, rolling back")
                        self._abort()
                        raise
                    self._run_after_commit()

    def after_commit(self, callback: Callable[[], None]) -> None:
        """Run callback once the current transaction commits (now, if none is open)."""
        with self._lock:
            if self.in_transaction:
                self._after_commit.append(callback)
                return
        callback()

    def _run_after_commit(self) -> None:
        callbacks, self._after_commit = self._after_commit, []
        for callback in callbacks:
            callback()

    def _abort(self) -> None:
        self._after_commit = []
        self._rollback()

    def _begin(self) -> None:
        pass

    def _commit(self) -> None:
        pass

    def _rollback(self) -> None:
        pass

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0

    def close(self) -> None:
        pass


class MemoryRecordStore(RecordStore):
    """Dict of lists held in memory. Snapshot/restore gives rollback."""

    def __init__(self, data: Optional[Dict[str, List[dict]]] = None):
        super().__init__()
        self._data: Dict[str, List[dict]] = {name: [] for name in COLLECTIONS.values()}
        if data:
            for name, records in data.items():
                self._data[name] = copy.deepcopy(records)
        self._snapshot: Optional[Dict[str, List[dict]]] = None

    def _records(self, collection: str) -> List[dict]:
        return self._data.setdefault(collection, [])

    def _index_of(self, collection: str, record_id: str) -> int:
        for idx, record in enumerate(self._records(collection)):
            if record.get("id") == record_id:
                return idx
        return -1

    def all(self, collection: str) -> List[dict]:
        return copy.deepcopy(self._records(collection))

    def get(self, collection: str, record_id: str) -> Optional[dict]:
        idx = self._index_of(collection, record_id)
        if idx == -1:
            return None
        return copy.deepcopy(self._records(collection)[idx])

    # Each write is its own transaction unless one is already open

    def insert(self, collection: str, record: dict) -> None:
        with self.transaction():
            if self._index_of(collection, record["id"]) != -1:
                raise DuplicateRecord(f"{collection}: id {record['id']} already exists")
            self._records(collection).append(copy.deepcopy(record))

    def replace(self, collection: str, record_id: str, record: dict) -> bool:
        with self.transaction():
            idx = self._index_of(collection, record_id)
            if idx == -1:
                return False
            self._records(collection)[idx] = copy.deepcopy(record)
            return True

    def delete(self, collection: str, record_id: str) -> bool:
        with self.transaction():
            idx = self._index_of(collection, record_id)
            if idx == -1:
                return False
            del self._records(collection)[idx]
            return True

    def _begin(self) -> None:
        self._snapshot = copy.deepcopy(self._data)

    def _rollback(self) -> None:
        if self._snapshot is not None:
            self._data = self._snapshot
            self._snapshot = None
            logger.warning("Record store transaction rolled back")

    def _commit(self) -> None:
        self._snapshot = None

    def dump(self) -> Dict[str, List[dict]]:
        return copy.deepcopy(self._data)


class JsonFileRecordStore(MemoryRecordStore):
    """
    Memory store persisted to a single JSON file.

    The whole file is rewritten on every commit (write to a temp file in
    the same directory, then os.replace), so a crash never leaves a
    half-written file behind. A failed write rolls the in-memory state
    back as well.
    """

    def __init__(self, path: str):
        self.path = os.path.abspath(path)
        data = None
        if os.path.exists(self.path):
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            logger.info("Loaded record store from %s", self.path)
        super().__init__(data)

    def _commit(self) -> None:
        # Write first: if the file cannot be written the snapshot is still there to roll back to
        self.flush()
        super()._commit()

    def flush(self) -> None:
        directory = os.path.dirname(self.path) or "."
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".portal-", suffix=".json", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2)
            os.replace(tmp_path, self.path)
        except Exception:
            os.unlink(tmp_path)
            raise


def get_record_store(settings) -> RecordStore:
    """Build the backend named by settings.store_backend."""
    backend = settings.store_backend
    if backend == "memory":
        return MemoryRecordStore()
    if backend == "json":
        return JsonFileRecordStore(settings.data_file)
    if backend == "mongo":
        from alumni_portal.db.mongodb import MongoRecordStore, get_mongo_db
        return MongoRecordStore(get_mongo_db())
    raise ValueError(f"Unknown store backend: {backend}")
