"""
Configuration error exception
"""
from common.exceptions.base_exception import CheckedException


class ConfigurationErrorException(CheckedException):
    def __init__(self, message: str = "Configuration error"):
        super(ConfigurationErrorException, self).__init__(message)
