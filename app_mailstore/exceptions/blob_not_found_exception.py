from app_mailstore.exceptions.storage_exception import StorageException


class BlobNotFoundException(StorageException):

    def __init__(self, message="Blob not found"):
        super().__init__(message)
