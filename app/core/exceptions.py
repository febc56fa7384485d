# app/core/exceptions.py

from fastapi import HTTPException, status

class AuthException(HTTPException):
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

# =======================================================
# Reservation engine errors
# =======================================================
class ReservationError(Exception):
    """
    Base class for every error raised by the reservation engine.

    ``status_code`` is the HTTP status the API boundary answers with;
    the services themselves never build HTTP responses.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Unexpected reservation error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def error_type(self) -> str:
        return type(self).__name__

class ValidationError(ReservationError):
    """Malformed or missing input, raised before any write."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"

class NotFoundError(ReservationError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Record not found"

class ConflictError(ReservationError):
    """Optimistic-concurrency violation or a transition out of a terminal state."""
    status_code = status.HTTP_409_CONFLICT
    default_message = "The slot was changed by another operation"

class StorageIOError(ReservationError):
    """The database or the file storage could not be reached or refused the write."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Storage is unavailable, please try again"

class UnknownError(ReservationError):
    pass
