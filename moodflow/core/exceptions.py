"""
Domain exceptions raised by services and translated to HTTP errors by endpoints.
"""


class MoodFlowError(Exception):
    """Base class for application errors."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class UserNotFoundError(MoodFlowError):
    pass


class UserAlreadyExistsError(MoodFlowError):
    pass


class InvalidCredentialsError(MoodFlowError):
    pass


class UnauthorizedError(MoodFlowError):
    pass


class WeakPasswordError(MoodFlowError):
    pass


class MoodEntryNotFoundError(MoodFlowError):
    pass


class StorageError(MoodFlowError):
    """The entry store could not be read or written."""
