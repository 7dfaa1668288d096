from app_mailstore.models.label import Label, LabelMap
from app_mailstore.models.label_counters import LabelCounters
from app_mailstore.models.mailbox import Mailbox
from app_mailstore.models.message import Message, MessageModification
from app_mailstore.models.purge_entry import PurgeEntry

__all__ = [
    'Label',
    'LabelMap',
    'LabelCounters',
    'Mailbox',
    'Message',
    'MessageModification',
    'PurgeEntry',
]
