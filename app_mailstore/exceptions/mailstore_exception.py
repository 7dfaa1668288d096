"""
Base exception for mailbox metadata store
"""

from common.exceptions.base_exception import CheckedException


class MailstoreException(CheckedException):
    """Base exception for mailbox metadata store errors"""
    pass
