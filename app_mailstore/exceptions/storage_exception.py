from app_mailstore.exceptions.mailstore_exception import MailstoreException


class StorageException(MailstoreException):

    def __init__(self, message="Storage failure"):
        super().__init__(message)
