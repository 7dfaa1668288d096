"""
Mail store application configuration

Loads the mail store settings from environment variables, with layered .env
file support (.env, then .env.test or .env.prod picked by RUN_ENV).
"""
from pathlib import Path
from typing import Dict

from app_mailstore.consts.label_const import MAX_LABEL_NAME_LENGTH
from app_mailstore.consts.mailstore_const import DEFAULT_QUOTA_BYTES, DEFAULT_QUOTA_COUNT, DEFAULT_WINDOW_SIZE, \
    DEFAULT_PURGE_AGE_DAYS
from common.utils.env_util import load_env

BACKENDS = ("memory", "mongo")
BLOB_BACKENDS = ("memory", "s3")


def get_base_dir() -> Path:
    """
    Get the project root directory.

    Returns:
        Path to the project root directory
    """
    # app_mailstore/config.py -> app_mailstore -> project root
    return Path(__file__).resolve().parent.parent


def get_env():
    return load_env(get_base_dir())


def get_app_config() -> Dict:
    """
    Get mail store configuration from environment variables.

    Returns:
        Dictionary containing mail store configuration values

    Raises:
        ConfigurationErrorException: If configuration values are invalid
    """
    from common.exceptions.configuration_error_exception import ConfigurationErrorException

    env = get_env()

    try:
        quota_bytes = env.int("MAILSTORE_QUOTA_BYTES", default=DEFAULT_QUOTA_BYTES)
        quota_count = env.int("MAILSTORE_QUOTA_COUNT", default=DEFAULT_QUOTA_COUNT)
        window_size = env.int("MAILSTORE_WINDOW_SIZE", default=DEFAULT_WINDOW_SIZE)
        purge_age_days = env.int("MAILSTORE_PURGE_AGE_DAYS", default=DEFAULT_PURGE_AGE_DAYS)
        max_label_name_length = env.int("MAILSTORE_MAX_LABEL_NAME_LENGTH", default=MAX_LABEL_NAME_LENGTH)

        # Metadata backend
        backend = env("MAILSTORE_BACKEND", default="memory").lower()
        mongo_uri = env("MAILSTORE_MONGO_URI", default="mongodb://localhost:27017")
        mongo_db = env("MAILSTORE_MONGO_DB", default="mailstore")

        # Payload backend
        blob_backend = env("MAILSTORE_BLOB_BACKEND", default="memory").lower()
        blob_bucket = env("MAILSTORE_BLOB_BUCKET", default="mailstore")
        blob_endpoint = env("MAILSTORE_BLOB_ENDPOINT", default=None)
        blob_access_key = env("MAILSTORE_BLOB_ACCESS_KEY", default="dummy")
        blob_secret_key = env("MAILSTORE_BLOB_SECRET_KEY", default="dummy")

        if backend not in BACKENDS:
            raise ConfigurationErrorException(f"MAILSTORE_BACKEND must be one of {BACKENDS}, got {backend}")
        if blob_backend not in BLOB_BACKENDS:
            raise ConfigurationErrorException(
                f"MAILSTORE_BLOB_BACKEND must be one of {BLOB_BACKENDS}, got {blob_backend}")
        if window_size <= 0:
            raise ConfigurationErrorException(f"MAILSTORE_WINDOW_SIZE must be positive, got {window_size}")
        if quota_bytes <= 0 or quota_count <= 0:
            raise ConfigurationErrorException("MAILSTORE_QUOTA_BYTES and MAILSTORE_QUOTA_COUNT must be positive")

        return {
            "quota_bytes": quota_bytes,
            "quota_count": quota_count,
            "window_size": window_size,
            "purge_age_days": purge_age_days,
            "max_label_name_length": max_label_name_length,
            "backend": backend,
            "mongo_uri": mongo_uri,
            "mongo_db": mongo_db,
            "blob_backend": blob_backend,
            "blob_bucket": blob_bucket,
            "blob_endpoint": blob_endpoint,
            "blob_access_key": blob_access_key,
            "blob_secret_key": blob_secret_key,
        }
    except ConfigurationErrorException:
        raise
    except Exception as e:
        raise ConfigurationErrorException(
            f"Failed to load mail store configuration: {str(e)}"
        ) from e
