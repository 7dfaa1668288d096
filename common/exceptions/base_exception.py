class CheckedException(Exception):
    """
    Base of the exceptions callers are expected to handle
    """

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)
