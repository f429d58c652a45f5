"""
utils/errors.py
---------------
Error taxonomy shared by every layer.

Services raise these; the HTTP layer (handlers/error_handler.py) turns each
one into a status code and a ``{"message": ...}`` body.
"""


class FinanceError(Exception):
    """Base class for every error the application reports to a user."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FinanceError):
    """A required field is missing or carries an invalid value."""

    status_code = 400


class NotFoundError(FinanceError):
    """The addressed record does not exist."""

    status_code = 404


class StoreUnavailableError(FinanceError):
    """The record store could not be reached."""

    status_code = 503

    def __init__(self, message: str = "The data store is unreachable. Please try again."):
        super().__init__(message)


class PartialOperationError(FinanceError):
    """
    A compound operation stopped halfway.

    Attributes:
        completed: Steps that were persisted before the failure.
        failed: The step that raised.
    """

    status_code = 500

    def __init__(self, message: str, completed: list[str], failed: str):
        super().__init__(message)
        self.completed = completed
        self.failed = failed
