"""Map domain and validation failures to HTTP responses.

Error bodies are ``{"message": str}``, or ``{"errors": [{"field", "message"}]}``
for field validation failures.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.shared.exceptions import StorefrontError

logger = structlog.get_logger(__name__)


def _field_errors(messages: dict) -> list[dict]:
    errors = []
    for field, field_messages in messages.items():
        if isinstance(field_messages, str):
            field_messages = [field_messages]
        errors.extend({"field": field, "message": str(message)} for message in field_messages)
    return errors


async def _storefront_error(request: Request, exc: StorefrontError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def _domain_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"errors": _field_errors(exc.messages)})


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"errors": errors})


async def _object_not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": "Not found"})


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, method=request.method)
    return JSONResponse(status_code=500, content={"message": "Server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, _storefront_error)
    app.add_exception_handler(ValidationError, _domain_validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, _object_not_found)
    app.add_exception_handler(Exception, _unhandled_error)
