"""Domain errors and their HTTP mapping."""

import logging
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    detail = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)

    def to_dict(self) -> dict:
        return {"detail": self.detail}


class ValidationError(AppError):
    """Input the user can fix. Carries one entry per offending field."""

    status_code = 400
    detail = "Invalid request"

    def __init__(self, errors: Optional[List[dict]] = None, detail: Optional[str] = None):
        super().__init__(detail)
        self.errors = errors or []

    @classmethod
    def from_pydantic(cls, errors) -> "ValidationError":
        fields = []
        for err in errors:
            # ("body", "priority") -> "priority"
            loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
            fields.append({"field": ".".join(loc) or None, "message": err.get("msg", "invalid value")})
        return cls(errors=fields)

    def to_dict(self) -> dict:
        return {"detail": self.detail, "errors": self.errors}


class Unauthenticated(AppError):
    status_code = 401
    detail = "Unauthorized"


class InvalidCredentials(AppError):
    status_code = 401
    detail = "Invalid username or password"


class NotFound(AppError):
    status_code = 404
    detail = "Not found"


class DuplicateUsername(AppError):
    status_code = 409
    detail = "Username already taken"


class PersistenceFailure(AppError):
    status_code = 500
    detail = "Internal server error"


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = ValidationError.from_pydantic(exc.errors())
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def _database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    error = PersistenceFailure()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, _database_error_handler)
