from app_mailstore.exceptions.mailstore_exception import MailstoreException


class OverQuotaException(MailstoreException):

    def __init__(self, message="Mailbox is over quota"):
        super().__init__(message)
