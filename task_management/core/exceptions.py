"""
Domain errors and their HTTP rendering.
"""
import logging
from typing import Any, Dict, List, Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    error_type: str = "service_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.error_type, "message": self.message}


class ValidationError(ServiceError):
    """Malformed, missing or out-of-enum input."""

    status_code = 422
    error_type = "validation_error"

    def __init__(self, message: str = "Validation failed", errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, errors=[{"field": field, "message": message}])

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["errors"] = self.errors
        return data


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    error_type = "conflict"


class AuthenticationError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_type = "authentication_error"


class AuthorizationError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    error_type = "authorization_error"


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    error_type = "not_found"

    @classmethod
    def for_resource(cls, resource: str, resource_id: Any) -> "NotFoundError":
        return cls(f"{resource} {resource_id} not found")


def field_errors(exc: RequestValidationError) -> List[Dict[str, str]]:
    """Flatten pydantic error entries into ``{field, message}`` pairs."""
    errors = []
    for error in exc.errors():
        # Drop the leading "body"/"query"/"path" location segment
        location = [str(part) for part in error.get("loc", ())[1:]]
        errors.append({
            "field": ".".join(location) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """Render domain and request validation errors in a single envelope."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} rejected: {exc.error_type} - {exc.message}")

        headers = None
        if isinstance(exc, AuthenticationError):
            headers = {"WWW-Authenticate": "Bearer"}

        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.to_dict()},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error = ValidationError("Request validation failed", errors=field_errors(exc))
        return JSONResponse(
            status_code=error.status_code,
            content={"error": error.to_dict()},
        )
