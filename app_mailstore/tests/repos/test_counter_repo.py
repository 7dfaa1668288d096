from unittest import TestCase

from app_mailstore.conn.kv_store import WriteBatch
from app_mailstore.conn.memory_store import MemoryKeyValueStore
from app_mailstore.models.label_counters import LabelCounters
from app_mailstore.models.mailbox import Mailbox
from app_mailstore.repos.counter_repo import CounterStore


class TestCounterStore(TestCase):
    def setUp(self):
        self.kv_store = MemoryKeyValueStore()
        self.counters = CounterStore(self.kv_store)
        self.mailbox = Mailbox("user@example.com")

    def _apply(self, fn, *args):
        batch = WriteBatch()
        fn(batch, self.mailbox, *args)
        self.kv_store.execute(batch)

    def test_missing_counters_are_zero(self):
        self.assertEqual(self.counters.get(self.mailbox, 0), LabelCounters())
        self.assertEqual(self.counters.get_all(self.mailbox), {})

    def test_deltas_accumulate(self):
        self._apply(self.counters.add, [0, 42], LabelCounters(2, 2, 200))
        self._apply(self.counters.subtract, [42], LabelCounters(1, 0, 50))
        self._apply(self.counters.add, [0], LabelCounters(0, -1, 0))

        self.assertEqual(self.counters.get(self.mailbox, 0), LabelCounters(2, 1, 200))
        self.assertEqual(self.counters.get_all(self.mailbox), {
            0: LabelCounters(2, 1, 200),
            42: LabelCounters(1, 2, 150),
        })

    def test_delete(self):
        self._apply(self.counters.add, [0, 42], LabelCounters(1, 1, 10))
        self._apply(self.counters.delete, 42)

        self.assertEqual(list(self.counters.get_all(self.mailbox)), [0])

        self._apply(self.counters.delete_all)
        self.assertEqual(self.counters.get_all(self.mailbox), {})
