class DirectoryError(Exception):
    """Base class for errors raised by the user directory."""


class NotFoundError(DirectoryError):
    """
    A lookup matched nothing.
    Raised by ``get`` for an unknown username and by the message listings
    when the user has no messages in the requested direction.
    """

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)
        self.message = message


class InvariantViolationError(DirectoryError):
    """
    A caller broke the calling discipline, e.g. recorded a login for a user
    that does not exist. Never caught inside the directory.
    """
