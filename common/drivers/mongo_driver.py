import logging
import os
from typing import TYPE_CHECKING

from pymongo import MongoClient

from common.components.singleton import Singleton

if TYPE_CHECKING:
    from pymongo.collection import Collection


logger = logging.getLogger(__name__)

# Read SSL settings from environment
MONGO_TLS_INSECURE = os.environ.get("MONGO_TLS_INSECURE", "false").lower() == "true"


class MongoDriver(Singleton):
    def __init__(self, uri: str, db_name: str, server_selection_timeout_ms: int = 10000) -> None:
        client_options = {
            "serverSelectionTimeoutMS": server_selection_timeout_ms,
        }

        if MONGO_TLS_INSECURE:
            client_options["tlsAllowInvalidCertificates"] = True
            logger.warning("[MongoDriver] TLS certificate validation disabled (insecure)")

        self._client = MongoClient(uri, **client_options)
        self._db = self._client[db_name]
        try:
            self.ping()
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

    def close(self) -> None:
        if getattr(self, '_client', None) is not None:
            self._client.close()
            self._client = None
        # a closed driver must not be handed out again
        type(self).clear_instance(self)

    def ping(self) -> None:
        try:
            self._client.admin.command('ping')
        except Exception as e:
            logger.exception(e)
            raise

    def create_or_get_collection(self, coll_name: str) -> "Collection":
        """
        Create or get collection, collections are created lazily by the server
        """
        return self._db[coll_name]

    def create_index(self, coll_name: str, index_exprs: list[tuple[str, int]], unique: bool = False) -> str:
        coll = self.create_or_get_collection(coll_name)
        return coll.create_index(index_exprs, unique=unique)
