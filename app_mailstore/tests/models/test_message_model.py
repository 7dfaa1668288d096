from unittest import TestCase

from app_mailstore.enums.marker_enum import MarkerEnum
from app_mailstore.enums.reserved_label_enum import ReservedLabelEnum
from app_mailstore.models.label_counters import LabelCounters
from app_mailstore.models.mailbox import Mailbox
from app_mailstore.models.message import Message, MessageModification


class TestMessage(TestCase):
    def test_label_counters_of_unseen_message(self):
        message = Message(size=1024)
        self.assertEqual(message.get_label_counters(), LabelCounters(1, 1, 1024))

    def test_label_counters_of_seen_message(self):
        message = Message(size=1024)
        message.add_marker(MarkerEnum.SEEN)
        self.assertTrue(message.is_seen())
        self.assertEqual(message.get_label_counters(), LabelCounters(1, 0, 1024))

        message.remove_marker(MarkerEnum.SEEN)
        self.assertFalse(message.is_seen())

    def test_modification_is_empty(self):
        self.assertTrue(MessageModification().is_empty())
        self.assertFalse(MessageModification(markers_to_add={MarkerEnum.SEEN}).is_empty())


class TestMailbox(TestCase):
    def test_empty_id(self):
        with self.assertRaises(ValueError):
            Mailbox("")
        with self.assertRaises(ValueError):
            Mailbox("  ")

    def test_str(self):
        self.assertEqual(str(Mailbox("user@example.com")), "user@example.com")


class TestReservedLabelEnum(TestCase):
    def test_reserved_range(self):
        self.assertTrue(ReservedLabelEnum.contains(0))
        self.assertTrue(ReservedLabelEnum.contains(15))
        self.assertFalse(ReservedLabelEnum.contains(20))
