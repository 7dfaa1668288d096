from unittest import TestCase

from app_mailstore.models.mailbox import Mailbox
from app_mailstore.services.blob_naming import BlobNameBuilder, BlobNamingPolicy
from app_mailstore.utils.time_uuid_util import time_uuid_from_ms


class SuffixPolicy(BlobNamingPolicy):
    def __init__(self, suffix):
        self.suffix = suffix

    def get_blob_name(self, mailbox, message_id, message_size):
        return f"{mailbox.id}/{message_size}{self.suffix}"


class TestBlobNameBuilder(TestCase):
    def setUp(self):
        self.mailbox = Mailbox("user@example.com")
        self.message_id = time_uuid_from_ms(1700000000000)

    def test_default_policy(self):
        self.assertEqual(BlobNameBuilder().build(self.mailbox, self.message_id, 10),
                         f"user@example.com:{self.message_id}")

    def test_custom_policy(self):
        self.assertEqual(BlobNameBuilder(SuffixPolicy(".eml")).build(self.mailbox, self.message_id, 10),
                         "user@example.com/10.eml")

    def test_compression_suffix_is_rejected(self):
        with self.assertRaises(ValueError):
            BlobNameBuilder(SuffixPolicy(".dfl")).build(self.mailbox, self.message_id, 10)
