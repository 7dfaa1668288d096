"""
Mailbox metadata store repositories

Each repository owns one column family of the backing store. Writes are
collected into a WriteBatch by the caller; reads go to the store directly.
"""
from app_mailstore.repos.counter_repo import CounterStore
from app_mailstore.repos.label_index_repo import LabelIndex
from app_mailstore.repos.label_repo import LabelRepo
from app_mailstore.repos.message_repo import MessageRepo
from app_mailstore.repos.purge_queue_repo import PurgeQueue

__all__ = [
    'CounterStore',
    'LabelIndex',
    'LabelRepo',
    'MessageRepo',
    'PurgeQueue',
]
