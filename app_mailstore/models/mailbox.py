from dataclasses import dataclass


@dataclass(frozen=True)
class Mailbox:
    """Opaque tenant key, every record of the store is partitioned by it"""
    id: str

    def __post_init__(self):
        if not self.id or not self.id.strip():
            raise ValueError("mailbox id cannot be empty")

    def __str__(self):
        return self.id
