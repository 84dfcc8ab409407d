from typing import Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger


class AppError(Exception):
    """
    Base class for errors that are surfaced to the caller.

    Every error renders as {"error": {<field>: [<message>]}}, where the field
    is "message" unless the error concerns a specific input field.
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    field: str = "message"
    default_message: str = "internal server error"

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        self.message = message or self.default_message
        if field is not None:
            self.field = field
        super().__init__(self.message)

    @property
    def errors(self) -> Dict[str, List[str]]:
        return {self.field: [self.message]}


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "invalid request"


class LocationNotSetError(ValidationError):
    default_message = "User location not set"


class NotFoundError(AppError):
    # Missing users are reported as 422 by this API, not 404
    status_code = 422
    default_message = "resource not found"


class UserNotFoundError(NotFoundError):
    default_message = "cant found any user for this id"


class NotFollowingError(NotFoundError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "You were not following this user"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "unauthorized"


class InvalidCredentialsError(AuthError):
    default_message = "username or password wrong"


class UnauthorizedError(AuthError):
    pass


class ForbiddenError(AuthError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "you are not allowed to modify this user"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "conflict"


class AlreadyFollowingError(ConflictError):
    default_message = "You are already following this user"


class InconsistentRelationshipError(ConflictError):
    default_message = "relationship with this user is inconsistent"


class DuplicateUsernameError(ConflictError):
    status_code = status.HTTP_400_BAD_REQUEST
    field = "username"
    default_message = "username already registered"


class SelfActionError(AppError):
    status_code = 422  # Unprocessable Content
    default_message = "You cannot perform this action on yourself"


class SelfFollowError(SelfActionError):
    default_message = "You cannot follow yourself"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.errors})


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        # Drop the location kind ("body", "query", ...) and keep the field path
        parts = [str(part) for part in error.get("loc", ())[1:]]
        field = ".".join(parts) or "message"
        errors.setdefault(field, []).append(error.get("msg", "invalid value"))

    logger.warning(f"Request validation failed on {request.url.path}: {list(errors)}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": errors})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
