# ── src/errors.py ─────────────────────────────────────────────────────────────
"""
Custom errors and the shared error translator.

Handlers never catch store errors themselves; whatever is raised ends up
here and is mapped to a status code plus a `{"detail": ...}` body:

    DocumentNotFoundError / CosmosResourceNotFoundError   → 404
    OwnershipError                                       → 401
    DocumentValidationError / Cosmos 400 (bad document)  → 422
    CosmosResourceExistsError                            → 409
    anything else                                        → 500
"""
import logging
from typing import Any, Dict, Optional

from azure.cosmos import exceptions as cosmos_exceptions
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

_logger = logging.getLogger(__name__)


# ───────────────────────────── error types ────────────────────────────────────
class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class DocumentNotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "The requested resource was not found"


class OwnershipError(AppError):
    # Same status as a failed authentication; clients cannot tell the two apart.
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "The requested resource is not owned by the requesting user"


class DocumentValidationError(AppError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = "The document failed validation"


# ───────────────────────────── guards ─────────────────────────────────────────
def handle_404(doc: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Return `doc` unchanged, or raise DocumentNotFoundError when it is missing."""
    if not doc:
        raise DocumentNotFoundError()
    return doc


def _owner_id(doc: Dict[str, Any]) -> Optional[str]:
    owner = doc.get("owner")
    if isinstance(owner, dict):  # already resolved to {id, username}
        return owner.get("id")
    return owner


def require_ownership(user: Dict[str, Any], doc: Dict[str, Any]) -> None:
    """Raise OwnershipError unless `user` owns `doc`."""
    owner = _owner_id(doc)
    if owner is None or owner != user.get("id"):
        raise OwnershipError()


# ───────────────────────────── translator ─────────────────────────────────────
def _error_response(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


def register_error_handlers(app: FastAPI) -> None:
    """Install the shared translator on `app`."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        _logger.warning("%s %s → %s: %s", request.method, request.url.path, exc.status_code, exc.detail)
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(cosmos_exceptions.CosmosResourceNotFoundError)
    async def cosmos_not_found_handler(request: Request, exc: cosmos_exceptions.CosmosResourceNotFoundError):
        _logger.warning("%s %s → 404 (store)", request.method, request.url.path)
        return _error_response(status.HTTP_404_NOT_FOUND, DocumentNotFoundError.default_detail)

    @app.exception_handler(cosmos_exceptions.CosmosResourceExistsError)
    async def cosmos_exists_handler(request: Request, exc: cosmos_exceptions.CosmosResourceExistsError):
        _logger.warning("%s %s → 409 (store)", request.method, request.url.path)
        return _error_response(status.HTTP_409_CONFLICT, "The resource already exists")

    @app.exception_handler(cosmos_exceptions.CosmosHttpResponseError)
    async def cosmos_error_handler(request: Request, exc: cosmos_exceptions.CosmosHttpResponseError):
        # 400 from Cosmos means the document or id itself was malformed
        if exc.status_code == status.HTTP_400_BAD_REQUEST:
            _logger.warning("%s %s → 422 (store rejected document)", request.method, request.url.path)
            return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, DocumentValidationError.default_detail)
        _logger.exception("Store error on %s %s (status=%s)", request.method, request.url.path, exc.status_code)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, AppError.default_detail)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        _logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, AppError.default_detail)


__all__ = [
    "AppError",
    "DocumentNotFoundError",
    "OwnershipError",
    "DocumentValidationError",
    "handle_404",
    "require_ownership",
    "register_error_handlers",
]
