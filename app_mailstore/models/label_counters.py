from dataclasses import dataclass


@dataclass(frozen=True)
class LabelCounters:
    """
    Aggregated stats of a label: message count, unseen message count and byte count.

    Used both as an absolute snapshot and as a signed delta, all operations
    return a new instance.
    """
    total_messages: int = 0
    unseen_messages: int = 0
    total_bytes: int = 0

    def add(self, other: "LabelCounters") -> "LabelCounters":
        return LabelCounters(
            total_messages=self.total_messages + other.total_messages,
            unseen_messages=self.unseen_messages + other.unseen_messages,
            total_bytes=self.total_bytes + other.total_bytes,
        )

    def subtract(self, other: "LabelCounters") -> "LabelCounters":
        return self.add(other.inverse())

    def inverse(self) -> "LabelCounters":
        return LabelCounters(
            total_messages=-self.total_messages,
            unseen_messages=-self.unseen_messages,
            total_bytes=-self.total_bytes,
        )

    def is_zero(self) -> bool:
        return self.total_messages == 0 and self.unseen_messages == 0 and self.total_bytes == 0

    def __add__(self, other: "LabelCounters") -> "LabelCounters":
        return self.add(other)

    def __sub__(self, other: "LabelCounters") -> "LabelCounters":
        return self.subtract(other)

    def __neg__(self) -> "LabelCounters":
        return self.inverse()
