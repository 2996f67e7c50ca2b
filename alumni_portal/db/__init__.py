"""
Database module - record store backends (memory, JSON file, MongoDB).
"""
from alumni_portal.db.store import (
    COLLECTIONS,
    DuplicateRecord,
    JsonFileRecordStore,
    MemoryRecordStore,
    RecordStore,
    get_record_store,
)

__all__ = [
    "COLLECTIONS",
    "DuplicateRecord",
    "JsonFileRecordStore",
    "MemoryRecordStore",
    "RecordStore",
    "get_record_store",
]
