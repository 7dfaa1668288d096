from app_mailstore.services.label_store import LabelStore
from app_mailstore.services.mailbox_store import MailboxStore
from app_mailstore.services.message_id_generator import MessageIdGenerator
from app_mailstore.services.message_store import MessageStore

__all__ = [
    'LabelStore',
    'MailboxStore',
    'MessageIdGenerator',
    'MessageStore',
]
