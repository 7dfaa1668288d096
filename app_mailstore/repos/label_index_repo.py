"""
Label index

Per (mailbox, label) ordered set of message ids. Columns are sortable message
ids, so a range scan returns messages in time order and doubles as the
pagination primitive of the drain loops.
"""
import logging
from typing import Iterable, List, Optional, Set
from uuid import UUID

from app_mailstore.conn.kv_store import KeyValueStore, WriteBatch, build_partition
from app_mailstore.consts.mailstore_const import CF_LABEL_INDEX
from app_mailstore.models.mailbox import Mailbox
from app_mailstore.utils.time_uuid_util import from_sortable, to_sortable

logger = logging.getLogger(__name__)


class LabelIndex:

    def __init__(self, kv_store: KeyValueStore):
        self.kv_store = kv_store

    def add(self, batch: WriteBatch, mailbox: Mailbox, message_ids: Iterable[UUID],
            label_ids: Iterable[int]) -> None:
        columns = {to_sortable(message_id): "" for message_id in message_ids}
        for label_id in label_ids:
            batch.upsert(CF_LABEL_INDEX, self._partition(mailbox, label_id), columns)

    def remove(self, batch: WriteBatch, mailbox: Mailbox, message_ids: Iterable[UUID],
               label_ids: Iterable[int]) -> None:
        columns = [to_sortable(message_id) for message_id in message_ids]
        for label_id in label_ids:
            batch.delete_columns(CF_LABEL_INDEX, self._partition(mailbox, label_id), columns)

    def delete_index(self, batch: WriteBatch, mailbox: Mailbox, label_id: int) -> None:
        batch.delete_row(CF_LABEL_INDEX, self._partition(mailbox, label_id))

    def scan(self, mailbox: Mailbox, label_id: int, cursor: Optional[UUID] = None,
             count: int = 100, reverse: bool = False) -> List[UUID]:
        """
        Return up to `count` message ids strictly after (before, if reverse) the cursor
        """
        if count <= 0:
            raise ValueError(f"count must be positive, got {count}")
        start = to_sortable(cursor) if cursor is not None else None
        columns = self.kv_store.scan(CF_LABEL_INDEX, self._partition(mailbox, label_id),
                                     start=start, count=count, reverse=reverse)
        return [from_sortable(column) for column, _ in columns]

    def contains(self, mailbox: Mailbox, label_id: int, message_ids: Iterable[UUID]) -> Set[UUID]:
        """Subset of the given message ids that are members of the label"""
        by_column = {to_sortable(message_id): message_id for message_id in message_ids}
        found = self.kv_store.get_columns(CF_LABEL_INDEX, self._partition(mailbox, label_id), by_column)
        return {by_column[column] for column in found}

    @staticmethod
    def _partition(mailbox: Mailbox, label_id: int) -> str:
        return build_partition(mailbox.id, label_id)
