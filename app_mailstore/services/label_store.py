"""
Label store service

Label lifecycle (add, rename, delete, list) and counter reconciliation.
Reserved labels are never created, renamed or deleted here.
"""
import logging
from typing import Dict, Mapping

from app_mailstore.conn.kv_store import KeyValueStore, WriteBatch
from app_mailstore.consts.label_const import MAX_LABEL_NAME_LENGTH
from app_mailstore.consts.mailstore_const import DEFAULT_WINDOW_SIZE
from app_mailstore.enums.reserved_label_enum import ReservedLabelEnum
from app_mailstore.exceptions.illegal_label_exception import IllegalLabelException
from app_mailstore.models.label import LabelMap
from app_mailstore.models.label_counters import LabelCounters
from app_mailstore.models.mailbox import Mailbox
from app_mailstore.repos.counter_repo import CounterStore
from app_mailstore.repos.label_index_repo import LabelIndex
from app_mailstore.repos.label_repo import LabelRepo
from app_mailstore.services.message_store import MessageStore
from app_mailstore.utils.label_util import generate_label_id, validate_label_name

logger = logging.getLogger(__name__)


class LabelStore:
    """Label store service"""

    def __init__(self,
                 kv_store: KeyValueStore,
                 message_store: MessageStore,
                 window_size: int = DEFAULT_WINDOW_SIZE,
                 max_name_length: int = MAX_LABEL_NAME_LENGTH):
        if window_size <= 0:
            raise ValueError(f"window_size must be positive, got {window_size}")

        self.kv_store = kv_store
        self.message_store = message_store
        self.window_size = window_size
        self.max_name_length = max_name_length

        self.label_repo = LabelRepo(kv_store)
        self.label_index = LabelIndex(kv_store)
        self.counter_store = CounterStore(kv_store)

    def list_all(self, mailbox: Mailbox) -> Dict[int, str]:
        return self.label_repo.get_labels(mailbox).name_map()

    def list_all_with_metadata(self, mailbox: Mailbox) -> LabelMap:
        labels = self.label_repo.get_labels(mailbox)
        for label_id, counters in self.counter_store.get_all(mailbox).items():
            # counters of a label deleted concurrently may still be around
            if label_id in labels:
                labels[label_id].counters = counters
        return labels

    def add(self, mailbox: Mailbox, name: str) -> int:
        """
        Create a user label

        Returns:
            Id of the new label

        Raises:
            IllegalLabelException: Invalid name, or no free label id left
            ExistingLabelException: Name already used
        """
        existing_labels = self.label_repo.get_labels(mailbox)

        validate_label_name(name, existing_labels, self.max_name_length)

        try:
            label_id = generate_label_id(existing_labels.ids())
        except IllegalLabelException:
            logger.warning(f"[add] {mailbox} reached max random label id attempts with {len(existing_labels)} labels")
            raise

        batch = WriteBatch()
        self.label_repo.set_label_name(batch, mailbox, label_id, name)
        self.kv_store.execute(batch)

        logger.info(f"[add] Created label: mailbox={mailbox}, id={label_id}")
        return label_id

    def rename(self, mailbox: Mailbox, label_id: int, name: str) -> None:
        if ReservedLabelEnum.contains(label_id):
            raise IllegalLabelException("This is reserved label and can't be modified")

        existing_labels = self.label_repo.get_labels(mailbox)
        if label_id not in existing_labels:
            raise IllegalLabelException("Label does not exist")

        # letter case changes skip validation
        if name.lower() != existing_labels[label_id].name.lower():
            validate_label_name(name, existing_labels, self.max_name_length)

        batch = WriteBatch()
        self.label_repo.set_label_name(batch, mailbox, label_id, name)
        self.kv_store.execute(batch)

    def delete(self, mailbox: Mailbox, label_id: int) -> None:
        """
        Delete a user label, removing it from every message it is attached to first
        """
        if ReservedLabelEnum.contains(label_id):
            raise IllegalLabelException("This is reserved label and can't be modified")

        if label_id not in self.label_repo.get_labels(mailbox):
            raise IllegalLabelException("Label does not exist")

        # drain the index one window at a time
        cursor = None
        while True:
            message_ids = self.label_index.scan(mailbox, label_id, cursor, self.window_size)
            if message_ids:
                self.message_store.remove_label(mailbox, [label_id], message_ids)
                cursor = message_ids[-1]
            if len(message_ids) < self.window_size:
                break

        batch = WriteBatch()
        self.label_index.delete_index(batch, mailbox, label_id)
        self.counter_store.delete(batch, mailbox, label_id)
        self.label_repo.delete_label(batch, mailbox, label_id)
        self.kv_store.execute(batch)

        logger.info(f"[delete] Deleted label: mailbox={mailbox}, id={label_id}")

    def set_counters(self, mailbox: Mailbox, new_counters: Mapping[int, LabelCounters]) -> None:
        """
        Bring stored counters to the given values by applying differences only,
        counters of labels missing from new_counters are zeroed
        """
        existing_counters = self.counter_store.get_all(mailbox)

        batch = WriteBatch()
        for label_id, counters in new_counters.items():
            current = existing_counters.get(label_id, LabelCounters())
            diff = counters + current.inverse()
            if diff.is_zero():
                continue

            logger.debug(f"[set_counters] Recalculated counters for label {label_id}: "
                         f"current={current}, calculated={counters}, diff={diff}")

            self.counter_store.add(batch, mailbox, [label_id], diff)

        for label_id, current in existing_counters.items():
            if label_id not in new_counters:
                self.counter_store.subtract(batch, mailbox, [label_id], current)

        self.kv_store.execute(batch)
