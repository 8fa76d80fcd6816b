# storefront/errors.py
from typing import Optional

from fastapi import HTTPException, status

# Typed failures raised by the services. They subclass HTTPException so a
# route can let them propagate and FastAPI renders {"detail": message}.


class ApiError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(status_code=type(self).status_code, detail=self.message)


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InvalidInputError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class ConflictError(InvalidInputError):
    """A duplicate resource; reported as a bad request."""


class UnauthorizedError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class InternalFailureError(ApiError):
    pass
