class InvalidSplitError(ValueError):
    """Raised when split or balance input cannot be reconciled.

    The message is meant for the end user; the HTTP layer returns it as the
    ``detail`` of a 400 response.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
