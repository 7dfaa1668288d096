from app_mailstore.exceptions.mailstore_exception import MailstoreException


class IllegalLabelException(MailstoreException):

    def __init__(self, message="Illegal label"):
        super().__init__(message)
