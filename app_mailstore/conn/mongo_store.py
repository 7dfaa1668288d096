"""
MongoDB implementation of the ordered key/value store

Every column family is a collection holding one document per column:
{"p": partition, "c": column, "v": value}, with a unique index on (p, c).
Columns sort by binary string comparison, which is the server default
without a collation. Counter increments use the atomic $inc operator, so
concurrent writers never need a read-modify-write cycle.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pymongo import ASCENDING, DESCENDING, DeleteMany, UpdateOne
from pymongo.errors import PyMongoError

from app_mailstore.conn.kv_store import KeyValueStore, WriteBatch, OP_UPSERT, OP_DELETE_COLUMNS, \
    OP_DELETE_ROW, OP_INCREMENT
from app_mailstore.consts.mailstore_const import CF_MESSAGES, CF_LABELS, CF_LABEL_INDEX, CF_COUNTERS, \
    CF_PURGE_QUEUE
from app_mailstore.exceptions.storage_exception import StorageException
from common.drivers.mongo_driver import MongoDriver

logger = logging.getLogger(__name__)

FIELD_PARTITION = "p"
FIELD_COLUMN = "c"
FIELD_VALUE = "v"

ALL_FAMILIES = (CF_MESSAGES, CF_LABELS, CF_LABEL_INDEX, CF_COUNTERS, CF_PURGE_QUEUE)


class MongoKeyValueStore(KeyValueStore):

    def __init__(self, driver: MongoDriver, collection_prefix: str = "mailstore_"):
        self.driver = driver
        self.collection_prefix = collection_prefix

    def ensure_indexes(self) -> None:
        for family in ALL_FAMILIES:
            self.driver.create_index(self._collection_name(family),
                                     [(FIELD_PARTITION, ASCENDING), (FIELD_COLUMN, ASCENDING)],
                                     unique=True)
        logger.info(f"[ensure_indexes] Indexes ready for {len(ALL_FAMILIES)} collections")

    def execute(self, batch: WriteBatch) -> None:
        requests_by_family: Dict[str, list] = {}
        for mutation in batch.mutations:
            requests = requests_by_family.setdefault(mutation.family, [])
            if mutation.op == OP_UPSERT:
                for column, value in mutation.columns.items():
                    requests.append(UpdateOne(self._key(mutation.partition, column),
                                              {"$set": {FIELD_VALUE: value}},
                                              upsert=True))
            elif mutation.op == OP_INCREMENT:
                for column, delta in mutation.columns.items():
                    requests.append(UpdateOne(self._key(mutation.partition, column),
                                              {"$inc": {FIELD_VALUE: delta}},
                                              upsert=True))
            elif mutation.op == OP_DELETE_COLUMNS:
                requests.append(DeleteMany({FIELD_PARTITION: mutation.partition,
                                            FIELD_COLUMN: {"$in": list(mutation.columns)}}))
            elif mutation.op == OP_DELETE_ROW:
                requests.append(DeleteMany({FIELD_PARTITION: mutation.partition}))
            else:
                raise ValueError(f"unknown mutation: {mutation.op}")

        for family, requests in requests_by_family.items():
            if not requests:
                continue
            try:
                self._collection(family).bulk_write(requests, ordered=True)
            except PyMongoError as e:
                logger.exception(f"[execute] Failed to write {len(requests)} requests to {family}: {e}")
                raise StorageException(f"Failed to write batch to {family}") from e

    def get_row(self, family: str, partition: str) -> Dict[str, Any]:
        return self._find(family, {FIELD_PARTITION: partition}, ASCENDING)

    def get_columns(self, family: str, partition: str, column_names: Iterable[str]) -> Dict[str, Any]:
        names = list(column_names)
        if not names:
            return {}
        return self._find(family, {FIELD_PARTITION: partition, FIELD_COLUMN: {"$in": names}}, ASCENDING)

    def scan(self,
             family: str,
             partition: str,
             start: Optional[str] = None,
             end: Optional[str] = None,
             count: int = 100,
             reverse: bool = False) -> List[Tuple[str, Any]]:
        if count <= 0:
            return []
        column_cond = {}
        if start is not None:
            column_cond["$lt" if reverse else "$gt"] = start
        if end is not None:
            column_cond["$gt" if reverse else "$lt"] = end
        cond = {FIELD_PARTITION: partition}
        if column_cond:
            cond[FIELD_COLUMN] = column_cond
        row = self._find(family, cond, DESCENDING if reverse else ASCENDING, limit=count)
        return list(row.items())

    def _find(self, family: str, cond: dict, direction: int, limit: int = 0) -> Dict[str, Any]:
        try:
            cursor = self._collection(family).find(cond, {"_id": False}).sort(FIELD_COLUMN, direction)
            if limit:
                cursor = cursor.limit(limit)
            return {doc[FIELD_COLUMN]: doc.get(FIELD_VALUE) for doc in cursor}
        except PyMongoError as e:
            logger.exception(f"[_find] Failed to read {family}: {e}")
            raise StorageException(f"Failed to read from {family}") from e

    def _collection(self, family: str):
        return self.driver.create_or_get_collection(self._collection_name(family))

    def _collection_name(self, family: str) -> str:
        return f"{self.collection_prefix}{family}"

    @staticmethod
    def _key(partition: str, column: str) -> dict:
        return {FIELD_PARTITION: partition, FIELD_COLUMN: column}
