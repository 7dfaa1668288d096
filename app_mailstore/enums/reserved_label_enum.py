from enum import Enum

from app_mailstore.consts.label_const import MAX_RESERVED_LABEL_ID


class ReservedLabelEnum(Enum):
    ALL_MAILS = (0, "all")
    INBOX = (1, "inbox")
    DRAFTS = (2, "drafts")
    SENT = (3, "sent")
    TRASH = (4, "trash")
    SPAM = (5, "spam")
    STARRED = (6, "starred")
    IMPORTANT = (7, "important")
    NOTIFICATIONS = (8, "notifications")
    ATTACHMENTS = (9, "attachments")
    POP3 = (10, "pop3")

    def __init__(self, label_id: int, label_name: str):
        self.label_id = label_id
        self.label_name = label_name

    @classmethod
    def contains(cls, label_id: int) -> bool:
        """The whole reserved range is protected, not only the ids defined above"""
        return 0 <= label_id < MAX_RESERVED_LABEL_ID
