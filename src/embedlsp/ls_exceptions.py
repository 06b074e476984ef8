"""
Exceptions raised by embedlsp.
"""


class EmbeddedLSPException(Exception):
    def __init__(self, message: str, cause: Exception | None = None) -> None:
        """
        Initializes the exception with the given message.

        :param message: the message describing the exception
        :param cause: the original exception that caused this one, if any
        """
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        s = super().__str__()
        if self.cause:
            s += f" (caused by {self.cause})"
        return s


class InvalidSettingsError(EmbeddedLSPException):
    """Raised when embedded language settings are malformed."""
