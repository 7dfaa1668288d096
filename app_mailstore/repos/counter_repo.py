"""
Label counter repository

Every label of a mailbox owns three independent counters in the mailbox
partition. Deltas are applied with the store's atomic increment, so writers
never read before writing; snapshots returned by get/get_all are not
linearizable with concurrent writers.
"""
import logging
from typing import Dict, Iterable

from app_mailstore.conn.kv_store import KeyValueStore, WriteBatch
from app_mailstore.consts.mailstore_const import CF_COUNTERS, CN_TOTAL_MESSAGES, CN_UNSEEN_MESSAGES, CN_TOTAL_BYTES
from app_mailstore.models.label_counters import LabelCounters
from app_mailstore.models.mailbox import Mailbox

logger = logging.getLogger(__name__)

COUNTER_TYPES = (CN_TOTAL_MESSAGES, CN_UNSEEN_MESSAGES, CN_TOTAL_BYTES)


def _column(label_id: int, counter_type: str) -> str:
    return f"{label_id}:{counter_type}"


class CounterStore:

    def __init__(self, kv_store: KeyValueStore):
        self.kv_store = kv_store

    def add(self, batch: WriteBatch, mailbox: Mailbox, label_ids: Iterable[int], delta: LabelCounters) -> None:
        for label_id in label_ids:
            batch.increment(CF_COUNTERS, mailbox.id, _column(label_id, CN_TOTAL_MESSAGES), delta.total_messages)
            batch.increment(CF_COUNTERS, mailbox.id, _column(label_id, CN_UNSEEN_MESSAGES), delta.unseen_messages)
            batch.increment(CF_COUNTERS, mailbox.id, _column(label_id, CN_TOTAL_BYTES), delta.total_bytes)

    def subtract(self, batch: WriteBatch, mailbox: Mailbox, label_ids: Iterable[int],
                 delta: LabelCounters) -> None:
        self.add(batch, mailbox, label_ids, delta.inverse())

    def delete(self, batch: WriteBatch, mailbox: Mailbox, label_id: int) -> None:
        batch.delete_columns(CF_COUNTERS, mailbox.id,
                             [_column(label_id, counter_type) for counter_type in COUNTER_TYPES])

    def delete_all(self, batch: WriteBatch, mailbox: Mailbox) -> None:
        batch.delete_row(CF_COUNTERS, mailbox.id)

    def get(self, mailbox: Mailbox, label_id: int) -> LabelCounters:
        columns = self.kv_store.get_columns(CF_COUNTERS, mailbox.id,
                                            [_column(label_id, counter_type) for counter_type in COUNTER_TYPES])
        return LabelCounters(
            total_messages=columns.get(_column(label_id, CN_TOTAL_MESSAGES), 0),
            unseen_messages=columns.get(_column(label_id, CN_UNSEEN_MESSAGES), 0),
            total_bytes=columns.get(_column(label_id, CN_TOTAL_BYTES), 0),
        )

    def get_all(self, mailbox: Mailbox) -> Dict[int, LabelCounters]:
        values: Dict[int, Dict[str, int]] = {}
        for column, value in self.kv_store.get_row(CF_COUNTERS, mailbox.id).items():
            label_id, _, counter_type = column.partition(":")
            values.setdefault(int(label_id), {})[counter_type] = value
        return {
            label_id: LabelCounters(
                total_messages=counters.get(CN_TOTAL_MESSAGES, 0),
                unseen_messages=counters.get(CN_UNSEEN_MESSAGES, 0),
                total_bytes=counters.get(CN_TOTAL_BYTES, 0),
            )
            for label_id, counters in values.items()
        }
