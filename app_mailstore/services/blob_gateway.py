"""
Blob gateway

Message payloads are kept outside the metadata store. The gateway writes a
payload under a name and returns an opaque location, which is the only handle
the metadata store keeps.
"""
import io
import logging
import threading
from abc import ABC, abstractmethod
from typing import BinaryIO, Dict, Tuple
from urllib.parse import urlparse

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from app_mailstore.exceptions.blob_not_found_exception import BlobNotFoundException
from common.exceptions.configuration_error_exception import ConfigurationErrorException

logger = logging.getLogger(__name__)

S3_SCHEME = "s3"
MEMORY_SCHEME = "memory"


class BlobGateway(ABC):

    @abstractmethod
    def write(self, name: str, stream: BinaryIO, size: int) -> str:
        """Store payload and return its location"""

    @abstractmethod
    def read(self, location: str) -> BinaryIO:
        """Open payload stored at location"""

    @abstractmethod
    def delete(self, location: str) -> None:
        """Delete payload stored at location"""


class S3BlobGateway(BlobGateway):
    """Blob gateway backed by an S3-compatible object store"""

    def __init__(self, bucket: str, endpoint_url: str = None, access_key: str = 'dummy',
                 secret_key: str = 'dummy', region_name: str = 'us-east-1'):
        try:
            self.bucket = bucket
            self.s3_client = boto3.client(
                's3',
                endpoint_url=endpoint_url,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                region_name=region_name,
                config=Config(signature_version='s3v4')
            )
            logger.info(f"[S3BlobGateway] Initialized with bucket={self.bucket}, endpoint={endpoint_url}")

        except Exception as e:
            logger.exception(f"[S3BlobGateway] Failed to initialize: {e}")
            raise ConfigurationErrorException(f"Failed to initialize blob gateway: {str(e)}") from e

    def write(self, name: str, stream: BinaryIO, size: int) -> str:
        try:
            self.s3_client.put_object(
                Bucket=self.bucket,
                Key=name,
                Body=stream.read(),
                ContentLength=size,
                ContentType='message/rfc822',
            )
            logger.info(f"[write] Uploaded {self.bucket}/{name}, size={size}")
            return f"{S3_SCHEME}://{self.bucket}/{name}"

        except ClientError as e:
            logger.error(f"[write] Failed to upload {self.bucket}/{name}: {e}")
            raise

    def read(self, location: str) -> BinaryIO:
        bucket, key = self._parse_location(location)
        try:
            response = self.s3_client.get_object(Bucket=bucket, Key=key)
            logger.debug(f"[read] Opened {bucket}/{key}")
            return response['Body']

        except ClientError as e:
            error_code = e.response.get('Error', {}).get('Code', '')
            if error_code == 'NoSuchKey':
                logger.error(f"[read] Blob not found: {bucket}/{key}")
                raise BlobNotFoundException(f"Blob not found: {location}") from e
            logger.error(f"[read] Failed to download {bucket}/{key}: {e}")
            raise

    def delete(self, location: str) -> None:
        bucket, key = self._parse_location(location)
        try:
            self.s3_client.delete_object(Bucket=bucket, Key=key)
            logger.info(f"[delete] Deleted {bucket}/{key}")

        except ClientError as e:
            logger.error(f"[delete] Failed to delete {bucket}/{key}: {e}")
            raise

    @staticmethod
    def _parse_location(location: str) -> Tuple[str, str]:
        parsed = urlparse(location)
        if parsed.scheme != S3_SCHEME or not parsed.netloc:
            raise ValueError(f"Not an S3 blob location: {location}")
        return parsed.netloc, parsed.path.lstrip('/')


class MemoryBlobGateway(BlobGateway):
    """Blob gateway keeping payloads in process memory"""

    def __init__(self):
        self._blobs: Dict[str, bytes] = {}
        self._lock = threading.Lock()

    def write(self, name: str, stream: BinaryIO, size: int) -> str:
        data = stream.read()
        with self._lock:
            self._blobs[name] = data
        logger.debug(f"[write] Stored {name}, size={len(data)}")
        return f"{MEMORY_SCHEME}://{name}"

    def read(self, location: str) -> BinaryIO:
        name = self._parse_location(location)
        with self._lock:
            if name not in self._blobs:
                raise BlobNotFoundException(f"Blob not found: {location}")
            return io.BytesIO(self._blobs[name])

    def delete(self, location: str) -> None:
        name = self._parse_location(location)
        with self._lock:
            if self._blobs.pop(name, None) is None:
                raise BlobNotFoundException(f"Blob not found: {location}")

    def names(self) -> list:
        with self._lock:
            return sorted(self._blobs)

    @staticmethod
    def _parse_location(location: str) -> str:
        prefix = f"{MEMORY_SCHEME}://"
        if not location.startswith(prefix):
            raise ValueError(f"Not a memory blob location: {location}")
        return location[len(prefix):]
