"""
Error kinds raised by the service layer.

Each carries the HTTP status and the message that is safe to show a client;
the presentation layer renders them as {"error": message}.
"""


class RecordNotFoundError(Exception):
    """Raised by the data layer when no row matches a lookup."""


class ExpenseTrackerError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MalformedInputError(ExpenseTrackerError):
    status_code = 400
    default_message = "Malformed request"


class InvalidReferenceError(ExpenseTrackerError):
    status_code = 400
    default_message = "Invalid reference"


class UnauthenticatedError(ExpenseTrackerError):
    status_code = 401
    default_message = "Invalid user"


class InvalidCredentialsError(ExpenseTrackerError):
    status_code = 401
    default_message = "Invalid credentials"


class ConflictError(ExpenseTrackerError):
    status_code = 409
    default_message = "Conflict"


class StoreFailureError(ExpenseTrackerError):
    status_code = 500
