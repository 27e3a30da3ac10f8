"""
Domain errors and global exception handlers for consistent API errors.

Every error body is `{"message": ...}` (plus `request_id` when the request id
middleware assigned one).
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class NoteError(Exception):
    """Base for errors raised by the note service; carries its HTTP status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NoteValidationError(NoteError):
    status_code = 400


class NoteNotFoundError(NoteError):
    status_code = 404


class StorageError(NoteError):
    """Store unreachable or operation failed. The message is safe to expose."""

    status_code = 500


class StoreConfigError(RuntimeError):
    """Required store configuration is missing (fatal at startup)."""


class StoreConnectionError(RuntimeError):
    """The store could not be reached at startup (fatal)."""


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def _error_body(request: Request, message: str, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"message": message, **extra}
    rid = _req_id(request)
    if rid:
        body["request_id"] = rid
    return body


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("notes.errors")

    @app.exception_handler(NoteError)
    async def _note_error_handler(request: Request, exc: NoteError):
        if exc.status_code >= 500:
            log.warning("%s %s -> %s request_id=%s", request.method, request.url.path, exc.message, _req_id(request))
        return JSONResponse(status_code=exc.status_code, content=_error_body(request, exc.message))

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content=_error_body(request, exc.detail or "HTTP error"))

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        body = _error_body(request, "Validation error", errors=jsonable_errors(exc))
        return JSONResponse(status_code=422, content=body)

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        rid = _req_id(request)
        log.exception("Unhandled error request_id=%s", rid)
        return JSONResponse(status_code=500, content=_error_body(request, "Internal server error"))


def jsonable_errors(exc: RequestValidationError) -> list:
    # `ctx` puede traer excepciones no serializables (p.ej. ValueError)
    out = []
    for err in exc.errors():
        err = dict(err)
        if "ctx" in err:
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        err.pop("url", None)
        out.append(err)
    return out
