"""HTTP edge shared by the storefront routers.

Coded domain errors render as ``{"code": ..., "message": ...}``:

    validation errors  → 400
    state conflicts    → 409
    missing records    → 404
    data integrity     → 500

Everything else falls through to Protean's own FastAPI exception handlers.
``current_user`` is the dependency customer-facing routes use to learn who is
calling; it answers 401 when nobody is signed in.
"""

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError
from protean.integrations.fastapi import register_exception_handlers

from shared.accounts import get_identity_provider
from shared.accounts.port import CurrentUser
from shared.errors import DomainError, StateConflict, UnknownOrderStatus

logger = structlog.get_logger(__name__)


def current_user() -> CurrentUser:
    """Resolve the signed-in customer, or reject the request."""
    user = get_identity_provider().current_user()
    if user is None:
        raise HTTPException(status_code=401, detail="Sign in to continue")
    return user


def status_code_for(exc: DomainError) -> int:
    if isinstance(exc, StateConflict):
        return 409
    if isinstance(exc, UnknownOrderStatus):
        return 500
    return 400


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        status_code = status_code_for(exc)
        if status_code >= 500:
            logger.error("Domain data integrity error", code=exc.code, path=request.url.path)
        return JSONResponse(status_code=status_code, content={"code": exc.code, "message": exc.message})

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
        messages = getattr(exc, "messages", None)
        message = messages if isinstance(messages, str) else "Record not found"
        return JSONResponse(status_code=404, content={"code": "not_found", "message": message})
