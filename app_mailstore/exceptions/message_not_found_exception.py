from app_mailstore.exceptions.storage_exception import StorageException


class MessageNotFoundException(StorageException):

    def __init__(self, message="Message not found"):
        super().__init__(message)
