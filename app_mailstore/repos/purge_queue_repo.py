"""
Purge queue

Soft-deleted messages wait here for physical removal. Columns are
"<13 digit timestamp>:<sortable message id>" in the mailbox partition, so the
oldest entries come first and a cutoff is a plain exclusive upper bound.
"""
import logging
from typing import Iterable, List
from uuid import UUID

from app_mailstore.conn.kv_store import KeyValueStore, WriteBatch
from app_mailstore.consts.mailstore_const import CF_PURGE_QUEUE
from app_mailstore.models.mailbox import Mailbox
from app_mailstore.models.purge_entry import PurgeEntry
from app_mailstore.utils.time_uuid_util import from_sortable, to_sortable
from common.utils.date_util import get_now_timestamp_ms

logger = logging.getLogger(__name__)


def _column(entry: PurgeEntry) -> str:
    return f"{entry.timestamp:013d}:{to_sortable(entry.message_id)}"


def _entry(column: str) -> PurgeEntry:
    timestamp, _, message_key = column.partition(":")
    return PurgeEntry(timestamp=int(timestamp), message_id=from_sortable(message_key))


class PurgeQueue:

    def __init__(self, kv_store: KeyValueStore):
        self.kv_store = kv_store

    def add(self, batch: WriteBatch, mailbox: Mailbox, message_ids: Iterable[UUID]) -> List[PurgeEntry]:
        now = get_now_timestamp_ms()
        entries = [PurgeEntry(timestamp=now, message_id=message_id) for message_id in message_ids]
        batch.upsert(CF_PURGE_QUEUE, mailbox.id, {_column(entry): "" for entry in entries})
        return entries

    def get(self, mailbox: Mailbox, cutoff_ms: int, window_size: int) -> List[PurgeEntry]:
        """
        Return up to window_size oldest entries queued strictly before the cutoff
        """
        columns = self.kv_store.scan(CF_PURGE_QUEUE, mailbox.id, end=f"{cutoff_ms:013d}", count=window_size)
        return [_entry(column) for column, _ in columns]

    def remove(self, batch: WriteBatch, mailbox: Mailbox, entries: Iterable[PurgeEntry]) -> None:
        batch.delete_columns(CF_PURGE_QUEUE, mailbox.id, [_column(entry) for entry in entries])

    def delete_all(self, batch: WriteBatch, mailbox: Mailbox) -> None:
        batch.delete_row(CF_PURGE_QUEUE, mailbox.id)
