from dataclasses import FrozenInstanceError
from unittest import TestCase

from app_mailstore.models.label_counters import LabelCounters


class TestLabelCounters(TestCase):
    def test_add_and_subtract(self):
        a = LabelCounters(3, 1, 300)
        b = LabelCounters(1, 1, 50)
        self.assertEqual(a + b, LabelCounters(4, 2, 350))
        self.assertEqual(a - b, LabelCounters(2, 0, 250))
        self.assertEqual(a + b, b + a)

    def test_inverse(self):
        a = LabelCounters(3, 1, 300)
        self.assertEqual(-a, LabelCounters(-3, -1, -300))
        self.assertTrue((a + a.inverse()).is_zero())

    def test_immutable(self):
        a = LabelCounters(1, 1, 1)
        with self.assertRaises(FrozenInstanceError):
            a.total_messages = 2
