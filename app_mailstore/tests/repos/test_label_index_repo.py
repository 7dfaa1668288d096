from unittest import TestCase

from app_mailstore.conn.kv_store import WriteBatch
from app_mailstore.conn.memory_store import MemoryKeyValueStore
from app_mailstore.models.mailbox import Mailbox
from app_mailstore.repos.label_index_repo import LabelIndex
from app_mailstore.utils.time_uuid_util import time_uuid_from_ms


class TestLabelIndex(TestCase):
    def setUp(self):
        self.kv_store = MemoryKeyValueStore()
        self.index = LabelIndex(self.kv_store)
        self.mailbox = Mailbox("user@example.com")
        self.ids = [time_uuid_from_ms(1700000000000 + i) for i in range(5)]

        batch = WriteBatch()
        # inserted out of time order
        self.index.add(batch, self.mailbox, reversed(self.ids), [0, 42])
        self.kv_store.execute(batch)

    def test_scan_in_time_order(self):
        self.assertEqual(self.index.scan(self.mailbox, 42), self.ids)
        self.assertEqual(self.index.scan(self.mailbox, 42, reverse=True), list(reversed(self.ids)))

    def test_scan_from_cursor(self):
        self.assertEqual(self.index.scan(self.mailbox, 42, cursor=self.ids[1], count=2), self.ids[2:4])
        self.assertEqual(self.index.scan(self.mailbox, 42, cursor=self.ids[3], count=10, reverse=True),
                         [self.ids[2], self.ids[1], self.ids[0]])
        self.assertEqual(self.index.scan(self.mailbox, 42, cursor=self.ids[4]), [])

    def test_scan_rejects_non_positive_count(self):
        for count in (0, -1):
            with self.assertRaises(ValueError):
                self.index.scan(self.mailbox, 42, count=count)

    def test_remove(self):
        batch = WriteBatch()
        self.index.remove(batch, self.mailbox, self.ids[:2], [42])
        self.kv_store.execute(batch)

        self.assertEqual(self.index.scan(self.mailbox, 42), self.ids[2:])
        self.assertEqual(self.index.scan(self.mailbox, 0), self.ids)

    def test_contains(self):
        other = time_uuid_from_ms(1)
        self.assertEqual(self.index.contains(self.mailbox, 42, [self.ids[0], other]), {self.ids[0]})

    def test_delete_index(self):
        batch = WriteBatch()
        self.index.delete_index(batch, self.mailbox, 42)
        self.kv_store.execute(batch)

        self.assertEqual(self.index.scan(self.mailbox, 42), [])
        self.assertEqual(len(self.index.scan(self.mailbox, 0)), 5)

    def test_mailboxes_are_isolated(self):
        self.assertEqual(self.index.scan(Mailbox("other@example.com"), 42), [])
