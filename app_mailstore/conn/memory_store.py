"""
In-process implementation of the ordered key/value store

Used for tests and single node setups. Each batch is applied under one lock,
so it behaves like a store that never fails half way.
"""
import bisect
import logging
import threading
from typing import Any, Dict, Iterable, List, Optional, Tuple

from app_mailstore.conn.kv_store import KeyValueStore, WriteBatch, OP_UPSERT, OP_DELETE_COLUMNS, \
    OP_DELETE_ROW, OP_INCREMENT

logger = logging.getLogger(__name__)


class MemoryKeyValueStore(KeyValueStore):

    def __init__(self):
        # family -> partition -> column -> value
        self._data: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = threading.RLock()

    def execute(self, batch: WriteBatch) -> None:
        with self._lock:
            for mutation in batch.mutations:
                partitions = self._data.setdefault(mutation.family, {})
                if mutation.op == OP_UPSERT:
                    partitions.setdefault(mutation.partition, {}).update(mutation.columns)
                elif mutation.op == OP_INCREMENT:
                    row = partitions.setdefault(mutation.partition, {})
                    for column, delta in mutation.columns.items():
                        row[column] = row.get(column, 0) + delta
                elif mutation.op == OP_DELETE_COLUMNS:
                    row = partitions.get(mutation.partition)
                    if row is not None:
                        for column in mutation.columns:
                            row.pop(column, None)
                        if not row:
                            del partitions[mutation.partition]
                elif mutation.op == OP_DELETE_ROW:
                    partitions.pop(mutation.partition, None)
                else:
                    raise ValueError(f"unknown mutation: {mutation.op}")
        logger.debug(f"[execute] Applied {len(batch)} mutations")

    def get_row(self, family: str, partition: str) -> Dict[str, Any]:
        with self._lock:
            row = self._data.get(family, {}).get(partition, {})
            return {column: row[column] for column in sorted(row)}

    def get_columns(self, family: str, partition: str, column_names: Iterable[str]) -> Dict[str, Any]:
        with self._lock:
            row = self._data.get(family, {}).get(partition, {})
            return {column: row[column] for column in column_names if column in row}

    def scan(self,
             family: str,
             partition: str,
             start: Optional[str] = None,
             end: Optional[str] = None,
             count: int = 100,
             reverse: bool = False) -> List[Tuple[str, Any]]:
        with self._lock:
            row = self._data.get(family, {}).get(partition, {})
            columns = sorted(row)
            if not reverse:
                lo = bisect.bisect_right(columns, start) if start is not None else 0
                hi = bisect.bisect_left(columns, end) if end is not None else len(columns)
                selected = columns[lo:hi][:count]
            else:
                hi = bisect.bisect_left(columns, start) if start is not None else len(columns)
                lo = bisect.bisect_right(columns, end) if end is not None else 0
                selected = list(reversed(columns[lo:hi]))[:count]
            return [(column, row[column]) for column in selected]
