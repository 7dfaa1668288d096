from dataclasses import dataclass, field
from typing import Dict, Set

from app_mailstore.models.label_counters import LabelCounters


@dataclass
class Label:
    id: int
    name: str
    counters: LabelCounters = field(default_factory=LabelCounters)


class LabelMap(dict):
    """Labels of a mailbox keyed by label id"""

    def put(self, label: Label) -> None:
        self[label.id] = label

    def contains_name(self, name: str) -> bool:
        return any(label.name == name for label in self.values())

    def ids(self) -> Set[int]:
        return set(self.keys())

    def name_map(self) -> Dict[int, str]:
        return {label_id: label.name for label_id, label in self.items()}

    def counters_map(self) -> Dict[int, LabelCounters]:
        return {label_id: label.counters for label_id, label in self.items()}
