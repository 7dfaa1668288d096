"""
Mail store service wiring

Builds the backing store, the blob gateway and the stores on top of them from
the application configuration.
"""
import logging
from typing import Dict

from app_mailstore.config import get_app_config
from app_mailstore.conn.kv_store import KeyValueStore
from app_mailstore.conn.memory_store import MemoryKeyValueStore
from app_mailstore.conn.mongo_store import MongoKeyValueStore
from app_mailstore.services.blob_gateway import BlobGateway, MemoryBlobGateway, S3BlobGateway
from app_mailstore.services.label_store import LabelStore
from app_mailstore.services.mailbox_store import MailboxStore
from app_mailstore.services.message_id_generator import MessageIdGenerator
from app_mailstore.services.message_store import MessageStore
from common.drivers.mongo_driver import MongoDriver
from common.exceptions.configuration_error_exception import ConfigurationErrorException

logger = logging.getLogger(__name__)


class MailstoreService:
    """Entry point bundling the stores of one backing store and blob gateway"""

    def __init__(self, kv_store: KeyValueStore, blob_gateway: BlobGateway, app_config: Dict):
        self.kv_store = kv_store
        self.blob_gateway = blob_gateway
        self.purge_age_days = app_config["purge_age_days"]

        self.message_store = MessageStore(
            kv_store,
            blob_gateway,
            quota_bytes=app_config["quota_bytes"],
            quota_count=app_config["quota_count"],
            window_size=app_config["window_size"],
        )
        self.label_store = LabelStore(
            kv_store,
            self.message_store,
            window_size=app_config["window_size"],
            max_name_length=app_config["max_label_name_length"],
        )
        self.mailbox_store = MailboxStore(kv_store, self.message_store)
        self.id_generator = MessageIdGenerator()


def build_kv_store(app_config: Dict) -> KeyValueStore:
    if app_config["backend"] == "mongo":
        driver = MongoDriver(app_config["mongo_uri"], app_config["mongo_db"])
        kv_store = MongoKeyValueStore(driver)
        kv_store.ensure_indexes()
        return kv_store
    return MemoryKeyValueStore()


def build_blob_gateway(app_config: Dict) -> BlobGateway:
    if app_config["blob_backend"] == "s3":
        return S3BlobGateway(
            bucket=app_config["blob_bucket"],
            endpoint_url=app_config["blob_endpoint"],
            access_key=app_config["blob_access_key"],
            secret_key=app_config["blob_secret_key"],
        )
    return MemoryBlobGateway()


def build_mailstore_service(app_config: Dict) -> MailstoreService:
    try:
        kv_store = build_kv_store(app_config)
        blob_gateway = build_blob_gateway(app_config)
    except ConfigurationErrorException:
        raise
    except Exception as e:
        logger.exception(f"[build_mailstore_service] Failed to initialize backends: {e}")
        raise ConfigurationErrorException(f"Failed to initialize mail store: {str(e)}") from e

    logger.info(f"[build_mailstore_service] backend={app_config['backend']}, "
                f"blob_backend={app_config['blob_backend']}")
    return MailstoreService(kv_store, blob_gateway, app_config)


# Singleton instance
_mailstore_service = None


def get_mailstore_service() -> MailstoreService:
    """Get singleton mail store service instance"""
    global _mailstore_service
    if _mailstore_service is None:
        _mailstore_service = build_mailstore_service(get_app_config())
    return _mailstore_service


def set_mailstore_service(service: MailstoreService = None) -> None:
    """Replace the singleton instance, None drops it so the next call rebuilds from configuration"""
    global _mailstore_service
    _mailstore_service = service
