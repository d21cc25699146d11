class ELException(Exception):
    """
    Raised when an expression factory cannot be located, read or created.

    Args:
        message: Human readable description. Defaults to the cause's text.
        cause: The underlying exception, if any. It is also chained as
            ``__cause__`` when raised with ``raise ... from cause``.
    """

    def __init__(self, message=None, cause=None):
        if message is None and cause is not None:
            message = f"{type(cause).__name__}: {cause}"
        super().__init__(message)
        self.message = message
        self.cause = cause
