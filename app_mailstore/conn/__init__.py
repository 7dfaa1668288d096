from app_mailstore.conn.kv_store import KeyValueStore, WriteBatch
from app_mailstore.conn.memory_store import MemoryKeyValueStore

__all__ = [
    'KeyValueStore',
    'WriteBatch',
    'MemoryKeyValueStore',
]
