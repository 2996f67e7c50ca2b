"""
MongoDB Connection Utility + Mongo-backed record store

Each record collection (users, opportunities, events, applications,
notifications) maps to one MongoDB collection of the same name.

WHY MongoDB for these?
- Records are self-contained documents (skills, projects, registrations nest inline)
- No joins needed: names are denormalized at write time
- Unique indexes back the uniqueness rules (email, one application per pair)
"""
import logging
from typing import Any, List, Optional

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from alumni_portal.core.config import get_settings
from alumni_portal.db.store import COLLECTIONS, DuplicateRecord, RecordStore

logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(get_settings().mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the portal database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


def init_mongo_indexes(db: Database) -> None:
    """
    Create indexes for point lookups and uniqueness rules.
    Safe to call on every startup (create_index is idempotent).
    """
    for name in COLLECTIONS.values():
        db[name].create_index("id", unique=True)

    db[COLLECTIONS["users"]].create_index("email", unique=True)
    db[COLLECTIONS["users"]].create_index([("role", ASCENDING), ("status", ASCENDING)])

    # One application per (student, opportunity)
    db[COLLECTIONS["applications"]].create_index([
        ("student_id", ASCENDING),
        ("opportunity_id", ASCENDING)
    ], unique=True)

    db[COLLECTIONS["notifications"]].create_index("user_id")

    logger.info("MongoDB indexes created successfully")


class MongoRecordStore(RecordStore):
    """
    RecordStore on top of pymongo.

    Insertion order is kept by sorting on _id (ObjectIds grow with time);
    _id itself is never returned to callers. transaction() serializes
    operations inside this process but does not roll back: a standalone
    MongoDB has no multi-document transactions. Services validate before
    writing so a failing operation has nothing to undo.
    """

    def __init__(self, db: Database, create_indexes: bool = True):
        super().__init__()
        self.db = db
        if create_indexes:
            init_mongo_indexes(db)

    def _collection(self, name: str) -> Collection:
        return self.db[name]

    def all(self, collection: str) -> List[dict]:
        return list(self._collection(collection).find({}, {"_id": 0}).sort("_id", ASCENDING))

    def get(self, collection: str, record_id: str) -> Optional[dict]:
        return self._collection(collection).find_one({"id": record_id}, {"_id": 0})

    def find(self, collection: str, **filters: Any) -> List[dict]:
        cursor = self._collection(collection).find(filters, {"_id": 0}).sort("_id", ASCENDING)
        return list(cursor)

    def insert(self, collection: str, record: dict) -> None:
        try:
            # insert_one adds _id to the dict it is given; keep the caller's copy clean
            self._collection(collection).insert_one(dict(record))
        except DuplicateKeyError as e:
            raise DuplicateRecord(f"{collection}: {e.details.get('keyValue') if e.details else e}") from e

    def replace(self, collection: str, record_id: str, record: dict) -> bool:
        try:
            result = self._collection(collection).replace_one({"id": record_id}, dict(record))
        except DuplicateKeyError as e:
            raise DuplicateRecord(f"{collection}: {e.details.get('keyValue') if e.details else e}") from e
        return result.matched_count > 0

    def delete(self, collection: str, record_id: str) -> bool:
        result = self._collection(collection).delete_one({"id": record_id})
        return result.deleted_count > 0

    def close(self) -> None:
        global _client, _db
        client = self.db.client
        client.close()
        if client is _client:
            _client, _db = None, None
