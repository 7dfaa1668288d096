"""
Blob naming policies

A policy derives the blob name of a message payload from the mailbox, the
message id and the message size.
"""
from abc import ABC, abstractmethod
from uuid import UUID

from app_mailstore.consts.mailstore_const import BLOB_COMPRESS_SUFFIX
from app_mailstore.models.mailbox import Mailbox


class BlobNamingPolicy(ABC):

    @abstractmethod
    def get_blob_name(self, mailbox: Mailbox, message_id: UUID, message_size: int) -> str:
        pass


class UuidBlobNamingPolicy(BlobNamingPolicy):
    """<mailbox>:<message id>"""

    def get_blob_name(self, mailbox: Mailbox, message_id: UUID, message_size: int) -> str:
        return f"{mailbox.id}:{message_id}"


class BlobNameBuilder:

    def __init__(self, policy: BlobNamingPolicy = None):
        self.policy = policy or UuidBlobNamingPolicy()

    def build(self, mailbox: Mailbox, message_id: UUID, message_size: int) -> str:
        name = self.policy.get_blob_name(mailbox, message_id, message_size)
        if name.endswith(BLOB_COMPRESS_SUFFIX):
            raise ValueError(
                f"This suffix is reserved for internal compression. "
                f"Blob name should not end with {BLOB_COMPRESS_SUFFIX}")
        return name
