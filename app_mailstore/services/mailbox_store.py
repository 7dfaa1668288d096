"""
Mailbox store service

Provisioning and removal of a whole mailbox.
"""
import logging

from app_mailstore.conn.kv_store import KeyValueStore, WriteBatch
from app_mailstore.enums.reserved_label_enum import ReservedLabelEnum
from app_mailstore.models.mailbox import Mailbox
from app_mailstore.repos.counter_repo import CounterStore
from app_mailstore.repos.label_index_repo import LabelIndex
from app_mailstore.repos.label_repo import LabelRepo
from app_mailstore.repos.purge_queue_repo import PurgeQueue
from app_mailstore.services.message_store import MessageStore

logger = logging.getLogger(__name__)


class MailboxStore:
    """Mailbox store service"""

    def __init__(self, kv_store: KeyValueStore, message_store: MessageStore):
        self.kv_store = kv_store
        self.message_store = message_store

        self.label_repo = LabelRepo(kv_store)
        self.label_index = LabelIndex(kv_store)
        self.counter_store = CounterStore(kv_store)
        self.purge_queue = PurgeQueue(kv_store)

    def init(self, mailbox: Mailbox) -> None:
        """
        Provision a mailbox with the reserved labels
        """
        batch = WriteBatch()
        for reserved in ReservedLabelEnum:
            self.label_repo.set_label_name(batch, mailbox, reserved.label_id, reserved.label_name)
        self.kv_store.execute(batch)

        logger.info(f"[init] Provisioned mailbox: {mailbox}")

    def delete(self, mailbox: Mailbox) -> int:
        """
        Delete every message, payload, label, counter and purge entry of the mailbox

        Returns:
            Number of purged messages
        """
        all_mails = ReservedLabelEnum.ALL_MAILS.label_id
        window_size = self.message_store.window_size

        # soft delete all messages, one window at a time
        cursor = None
        while True:
            message_ids = self.label_index.scan(mailbox, all_mails, cursor, window_size)
            if message_ids:
                self.message_store.delete(mailbox, message_ids)
                cursor = message_ids[-1]
            if len(message_ids) < window_size:
                break

        purged = self.message_store.purge(mailbox)

        batch = WriteBatch()
        for label_id in self.label_repo.get_labels(mailbox).ids():
            self.label_index.delete_index(batch, mailbox, label_id)
        self.counter_store.delete_all(batch, mailbox)
        self.label_repo.delete_all(batch, mailbox)
        self.purge_queue.delete_all(batch, mailbox)
        self.kv_store.execute(batch)

        logger.info(f"[delete] Deleted mailbox: {mailbox}, purged={purged}")
        return purged
