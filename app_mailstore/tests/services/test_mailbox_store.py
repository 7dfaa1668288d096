import io
from unittest import TestCase

from app_mailstore.conn.memory_store import MemoryKeyValueStore
from app_mailstore.consts.mailstore_const import CF_MESSAGES, CF_LABELS, CF_LABEL_INDEX, CF_COUNTERS, \
    CF_PURGE_QUEUE
from app_mailstore.enums.reserved_label_enum import ReservedLabelEnum
from app_mailstore.models.mailbox import Mailbox
from app_mailstore.models.message import Message
from app_mailstore.services.blob_gateway import MemoryBlobGateway
from app_mailstore.services.label_store import LabelStore
from app_mailstore.services.mailbox_store import MailboxStore
from app_mailstore.services.message_store import MessageStore
from app_mailstore.utils.time_uuid_util import time_uuid_from_ms


class TestMailboxStore(TestCase):
    def setUp(self):
        self.kv_store = MemoryKeyValueStore()
        self.blob_gateway = MemoryBlobGateway()
        self.message_store = MessageStore(self.kv_store, self.blob_gateway, window_size=2)
        self.label_store = LabelStore(self.kv_store, self.message_store, window_size=2)
        self.mailbox_store = MailboxStore(self.kv_store, self.message_store)
        self.mailbox = Mailbox("user@example.com")

    def _put(self, mailbox, timestamp, labels):
        message_id = time_uuid_from_ms(timestamp)
        self.message_store.put(mailbox, message_id, Message(size=3, labels=set(labels)), io.BytesIO(b"abc"))
        return message_id

    def _family_rows(self, family):
        return self.kv_store._data.get(family, {})

    def test_init(self):
        self.mailbox_store.init(self.mailbox)

        names = self.label_store.list_all(self.mailbox)
        for reserved in ReservedLabelEnum:
            self.assertEqual(names[reserved.label_id], reserved.label_name)
        self.assertEqual(len(self.kv_store.get_row(CF_LABELS, self.mailbox.id)), len(ReservedLabelEnum))

    def test_delete_leaves_nothing(self):
        self.mailbox_store.init(self.mailbox)
        label_id = self.label_store.add(self.mailbox, "work")
        for i in range(5):
            self._put(self.mailbox, 1700000000000 + i, [ReservedLabelEnum.INBOX.label_id, label_id])
        # already soft deleted, waiting in the purge queue
        deleted_id = self._put(self.mailbox, 1700000001000, [label_id])
        self.message_store.delete(self.mailbox, [deleted_id])

        purged = self.mailbox_store.delete(self.mailbox)

        self.assertEqual(purged, 6)
        self.assertEqual(self.blob_gateway.names(), [])
        for family in (CF_MESSAGES, CF_LABEL_INDEX, CF_COUNTERS, CF_LABELS, CF_PURGE_QUEUE):
            self.assertEqual(self._family_rows(family), {}, family)

    def test_delete_keeps_other_mailboxes(self):
        other = Mailbox("other@example.com")
        kept_id = self._put(other, 1700000000000, [])
        self._put(self.mailbox, 1700000000001, [])

        self.mailbox_store.delete(self.mailbox)

        self.assertEqual(self.message_store.list_by_label(other, ReservedLabelEnum.ALL_MAILS.label_id), [kept_id])
        self.assertEqual(len(self.blob_gateway.names()), 1)

    def test_delete_empty_mailbox(self):
        self.assertEqual(self.mailbox_store.delete(self.mailbox), 0)
