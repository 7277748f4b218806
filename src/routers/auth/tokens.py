# ── src/routers/auth/tokens.py ────────────────────────────────────────────────
"""
Bearer-token helpers shared by every protected route.

- make_jwt(sub)            → HS256 token, `sub` = username, expires after JWT_TTL_HOURS
- extract_bearer_token(req)→ raw token from `Authorization: Bearer <JWT>`
- decode_jwt(token)        → subject (username)
- require_token            → FastAPI dependency yielding the requesting user document
"""
import datetime
import logging
import os
from typing import Any, Dict, Optional

import jwt
from azure.cosmos import exceptions
from fastapi import HTTPException, Request, status

import db

_logger = logging.getLogger(__name__)

_jwt_secret    = os.getenv("JWT_SECRET", "change-me")
_jwt_ttl_hours = int(os.getenv("JWT_TTL_HOURS", "24"))

# Never handed to route handlers or serialized back to clients
_PRIVATE_USER_FIELDS = ("password",)


def make_jwt(sub: str) -> str:
    exp = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(hours=_jwt_ttl_hours)
    return jwt.encode({"sub": sub, "exp": exp}, _jwt_secret, algorithm="HS256")


def extract_bearer_token(req: Request) -> str:
    auth = req.headers.get("Authorization", "")
    if not auth.lower().startswith("bearer "):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing bearer token")
    token = auth.split(" ", 1)[1].strip()
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing bearer token")
    return token


def decode_jwt(token: str) -> str:
    try:
        payload = jwt.decode(token, _jwt_secret, algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    sub = payload.get("sub")
    if not sub:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token (no subject)")
    return sub


def get_user_by_username(username: str) -> Optional[Dict[str, Any]]:
    """Fast point-read via id == partition key (/id == username)."""
    try:
        return db.users_container().read_item(item=username, partition_key=username)
    except exceptions.CosmosResourceNotFoundError:
        return None


def public_user(doc: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in db.strip_system_fields(doc).items() if k not in _PRIVATE_USER_FIELDS}


def require_token(request: Request) -> Dict[str, Any]:
    """
    Resolve the requesting user from the bearer token.
    Any failure (missing, malformed, expired, or a user that no longer exists) is a 401.
    """
    username = decode_jwt(extract_bearer_token(request))

    doc = get_user_by_username(username)
    if not doc:
        # token is valid but user doc is gone → treat as unauthorized
        _logger.warning("Token subject %s has no user document", username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    return public_user(doc)


__all__ = [
    "make_jwt",
    "extract_bearer_token",
    "decode_jwt",
    "get_user_by_username",
    "public_user",
    "require_token",
]
