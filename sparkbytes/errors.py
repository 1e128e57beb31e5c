"""Error taxonomy shared by services and routers.

Every error is an ``HTTPException`` so it travels through FastAPI's normal
exception path; ``main.py`` renders all of them as ``{success, message}``
envelopes.
"""
from fastapi import HTTPException, status


class SparkBytesError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(status_code=self.status_code, detail=message or self.default_message)

    @property
    def message(self) -> str:
        return self.detail


class ValidationError(SparkBytesError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class DuplicateError(SparkBytesError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Record already exists"


class DuplicateRSVPError(DuplicateError):
    default_message = "You have already RSVP'd to this event"


class CapacityExceededError(SparkBytesError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Event is at full capacity"


class AuthenticationError(SparkBytesError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Token is not valid"


class ForbiddenError(SparkBytesError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized"


class NotFoundError(SparkBytesError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(SparkBytesError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "The record was changed by another request, please retry"
