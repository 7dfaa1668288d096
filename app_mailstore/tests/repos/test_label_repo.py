from unittest import TestCase

from app_mailstore.conn.kv_store import WriteBatch
from app_mailstore.conn.memory_store import MemoryKeyValueStore
from app_mailstore.enums.reserved_label_enum import ReservedLabelEnum
from app_mailstore.models.mailbox import Mailbox
from app_mailstore.repos.label_repo import LabelRepo


class TestLabelRepo(TestCase):
    def setUp(self):
        self.kv_store = MemoryKeyValueStore()
        self.repo = LabelRepo(self.kv_store)
        self.mailbox = Mailbox("user@example.com")

    def test_reserved_labels_always_listed(self):
        labels = self.repo.get_labels(self.mailbox)
        self.assertEqual(labels.ids(), {reserved.label_id for reserved in ReservedLabelEnum})
        self.assertEqual(labels[0].name, "all")

    def test_user_labels(self):
        batch = WriteBatch()
        self.repo.set_label_name(batch, self.mailbox, 42, "work")
        # stored reserved names never win over the built-in ones
        self.repo.set_label_name(batch, self.mailbox, 1, "renamed")
        self.kv_store.execute(batch)

        names = self.repo.get_labels(self.mailbox).name_map()
        self.assertEqual(names[42], "work")
        self.assertEqual(names[1], "inbox")

        batch = WriteBatch()
        self.repo.delete_label(batch, self.mailbox, 42)
        self.kv_store.execute(batch)
        self.assertNotIn(42, self.repo.get_labels(self.mailbox))
