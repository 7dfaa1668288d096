from app_mailstore.exceptions.mailstore_exception import MailstoreException


class ExistingLabelException(MailstoreException):

    def __init__(self, message="Label with this name already exists"):
        super().__init__(message)
