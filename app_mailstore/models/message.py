from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Set

from app_mailstore.enums.marker_enum import MarkerEnum
from app_mailstore.models.label_counters import LabelCounters


@dataclass
class Message:
    """Metadata of a stored message, the payload itself lives in the blob store"""
    size: int = 0
    location: Optional[str] = None
    labels: Set[int] = field(default_factory=set)
    markers: Set[MarkerEnum] = field(default_factory=set)
    from_address: Optional[str] = None
    to_addresses: List[str] = field(default_factory=list)
    subject: Optional[str] = None
    date: Optional[datetime] = None
    minor_headers: Dict[str, str] = field(default_factory=dict)

    def add_label(self, label_id: int) -> None:
        self.labels.add(label_id)

    def remove_label(self, label_id: int) -> None:
        self.labels.discard(label_id)

    def add_marker(self, marker: MarkerEnum) -> None:
        self.markers.add(marker)

    def remove_marker(self, marker: MarkerEnum) -> None:
        self.markers.discard(marker)

    def is_seen(self) -> bool:
        return MarkerEnum.SEEN in self.markers

    def get_label_counters(self) -> LabelCounters:
        """Contribution of this message to the counters of each of its labels"""
        return LabelCounters(
            total_messages=1,
            unseen_messages=0 if self.is_seen() else 1,
            total_bytes=self.size,
        )


@dataclass
class MessageModification:
    """Labels and markers to add to or remove from a set of messages in one call"""
    labels_to_add: Set[int] = field(default_factory=set)
    labels_to_remove: Set[int] = field(default_factory=set)
    markers_to_add: Set[MarkerEnum] = field(default_factory=set)
    markers_to_remove: Set[MarkerEnum] = field(default_factory=set)

    def is_empty(self) -> bool:
        return not (self.labels_to_add or self.labels_to_remove
                    or self.markers_to_add or self.markers_to_remove)
