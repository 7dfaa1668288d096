from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, order=True)
class PurgeEntry:
    # time the message was queued, in milliseconds
    timestamp: int
    message_id: UUID
