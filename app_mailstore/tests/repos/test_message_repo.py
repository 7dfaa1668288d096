from datetime import datetime
from unittest import TestCase

from app_mailstore.conn.kv_store import WriteBatch
from app_mailstore.conn.memory_store import MemoryKeyValueStore
from app_mailstore.consts.mailstore_const import CF_MESSAGES
from app_mailstore.enums.marker_enum import MarkerEnum
from app_mailstore.models.mailbox import Mailbox
from app_mailstore.models.message import Message
from app_mailstore.repos.message_repo import MessageRepo, label_attribute, marker_attribute
from app_mailstore.utils.time_uuid_util import time_uuid_from_ms, to_sortable


class TestMessageRepo(TestCase):
    def setUp(self):
        self.kv_store = MemoryKeyValueStore()
        self.repo = MessageRepo(self.kv_store)
        self.mailbox = Mailbox("user@example.com")
        self.message_id = time_uuid_from_ms(1700000000000)

    def _persist(self, message_id, message):
        batch = WriteBatch()
        self.repo.persist_message(batch, self.mailbox, message_id, message)
        self.kv_store.execute(batch)

    def test_persist_and_fetch(self):
        message = Message(
            size=2048,
            location="memory://blob",
            labels={0, 1, 42},
            markers={MarkerEnum.SEEN},
            from_address="alice@example.com",
            to_addresses=["bob@example.com", "carol@example.com"],
            subject="Hello",
            date=datetime(2024, 1, 2, 3, 4, 5),
            minor_headers={"X-Priority": "1"},
        )
        self._persist(self.message_id, message)

        self.assertEqual(self.repo.fetch(self.mailbox, self.message_id), message)

        row = self.kv_store.get_row(CF_MESSAGES, f"{self.mailbox.id}:{to_sortable(self.message_id)}")
        self.assertIn("l:42", row)
        self.assertIn("m:1", row)

    def test_fetch_missing(self):
        self.assertIsNone(self.repo.fetch(self.mailbox, self.message_id))

    def test_fetch_many_keeps_order_and_skips_missing(self):
        ids = [time_uuid_from_ms(ts) for ts in (3, 1, 2)]
        self._persist(ids[0], Message(size=3))
        self._persist(ids[2], Message(size=2))

        messages = self.repo.fetch_many(self.mailbox, [ids[0], ids[1], ids[2], ids[0]])

        self.assertEqual(list(messages), [ids[0], ids[2]])
        self.assertEqual(messages[ids[2]].size, 2)

    def test_attributes(self):
        self._persist(self.message_id, Message(size=1, labels={0}))

        batch = WriteBatch()
        self.repo.persist_attributes(batch, self.mailbox, [self.message_id],
                                     [label_attribute(30), marker_attribute(MarkerEnum.REPLIED)])
        self.kv_store.execute(batch)

        message = self.repo.fetch(self.mailbox, self.message_id)
        self.assertEqual(message.labels, {0, 30})
        self.assertEqual(message.markers, {MarkerEnum.REPLIED})

        batch = WriteBatch()
        self.repo.delete_attributes(batch, self.mailbox, [self.message_id], [label_attribute(30)])
        self.kv_store.execute(batch)

        self.assertEqual(self.repo.fetch(self.mailbox, self.message_id).labels, {0})

    def test_delete_messages(self):
        self._persist(self.message_id, Message(size=1))

        batch = WriteBatch()
        self.repo.delete_messages(batch, self.mailbox, [self.message_id])
        self.kv_store.execute(batch)

        self.assertIsNone(self.repo.fetch(self.mailbox, self.message_id))
