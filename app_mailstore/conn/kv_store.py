"""
Ordered key/value store contract

Data is addressed by (column family, partition, column). Columns of a
partition are kept in lexicographic order so that bounded range scans are
cheap; there is no ordering across partitions and no transaction spanning
partitions. Every write goes through a WriteBatch, which is sent to the store
as one unit but is not guaranteed to be applied atomically.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

OP_UPSERT = "upsert"
OP_DELETE_COLUMNS = "delete_columns"
OP_DELETE_ROW = "delete_row"
OP_INCREMENT = "increment"


@dataclass
class Mutation:
    op: str
    family: str
    partition: str
    columns: Dict[str, Any] = field(default_factory=dict)


class WriteBatch:
    """Collects mutations of one logical operation"""

    def __init__(self):
        self.mutations: List[Mutation] = []

    def upsert(self, family: str, partition: str, columns: Dict[str, Any]) -> "WriteBatch":
        if columns:
            self.mutations.append(Mutation(OP_UPSERT, family, partition, dict(columns)))
        return self

    def delete_columns(self, family: str, partition: str, column_names: Iterable[str]) -> "WriteBatch":
        names = {name: None for name in column_names}
        if names:
            self.mutations.append(Mutation(OP_DELETE_COLUMNS, family, partition, names))
        return self

    def delete_row(self, family: str, partition: str) -> "WriteBatch":
        self.mutations.append(Mutation(OP_DELETE_ROW, family, partition))
        return self

    def increment(self, family: str, partition: str, column: str, delta: int) -> "WriteBatch":
        if delta:
            self.mutations.append(Mutation(OP_INCREMENT, family, partition, {column: delta}))
        return self

    def is_empty(self) -> bool:
        return not self.mutations

    def __len__(self):
        return len(self.mutations)


class KeyValueStore(ABC):

    @abstractmethod
    def execute(self, batch: WriteBatch) -> None:
        """
        Send all mutations of the batch to the store

        Raises:
            StorageException: the store rejected or failed the batch
        """

    @abstractmethod
    def get_row(self, family: str, partition: str) -> Dict[str, Any]:
        """All columns of a partition in column order, empty if absent"""

    @abstractmethod
    def get_columns(self, family: str, partition: str, column_names: Iterable[str]) -> Dict[str, Any]:
        """The requested columns that exist"""

    @abstractmethod
    def scan(self,
             family: str,
             partition: str,
             start: Optional[str] = None,
             end: Optional[str] = None,
             count: int = 100,
             reverse: bool = False) -> List[Tuple[str, Any]]:
        """
        Bounded range scan within one partition

        Args:
            family: Column family
            partition: Partition key
            start: Exclusive bound to continue from, None for the first (or last, if reverse) column
            end: Exclusive bound to stop at, None for no bound
            count: Max number of columns returned
            reverse: Scan in descending column order

        Returns:
            List of (column, value) pairs in scan order
        """


def build_partition(mailbox_id: str, suffix: Any) -> str:
    return f"{mailbox_id}:{suffix}"
