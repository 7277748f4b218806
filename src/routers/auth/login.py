# ── src/routers/auth/login.py ────────────────────────────────────────────────
import logging

from fastapi import APIRouter, HTTPException, status
from passlib.hash import sha256_crypt
from pydantic import BaseModel

import db
from .tokens import get_user_by_username, make_jwt

_logger = logging.getLogger(__name__)

# ────────────────────────── Pydantic model ─────────────────────
class LoginIn(BaseModel):
    # NOTE: This field may carry either the username *or* the e-mail.
    username: str
    password: str

class TokenOut(BaseModel):
    access_token: str
    token_type:   str = "bearer"

# ───────────────────────── helper functions ────────────────────
def _verify_pwd(pwd: str, hashed: str) -> bool:
    return sha256_crypt.verify(pwd, hashed)

def _looks_like_email(s: str) -> bool:
    return "@" in s and "." in s

def _get_user_by_email(email: str):
    """Cross-partition query by unique e-mail; at most one hit."""
    query = "SELECT * FROM c WHERE c.email = @e"
    params = [{"name": "@e", "value": email}]
    items = list(db.users_container().query_items(
        query=query,
        parameters=params,
        enable_cross_partition_query=True
    ))
    return items[0] if items else None

def _find_user(identifier: str):
    """Accepts username or e-mail; tries the likelier lookup first."""
    if _looks_like_email(identifier):
        return _get_user_by_email(identifier) or get_user_by_username(identifier)
    return get_user_by_username(identifier) or _get_user_by_email(identifier)

# ──────────────────────────── Router ────────────────────────────
router = APIRouter(
    prefix="/api/auth",
    tags=["auth"]
)

@router.post("/login", response_model=TokenOut)
def login(creds: LoginIn):
    identifier = creds.username.strip()

    db_user = _find_user(identifier)
    if not db_user or not _verify_pwd(creds.password, db_user.get("password", "")):
        _logger.info("Failed login for %s", identifier)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username/email or password")

    # JWT sub is the stable username/id key
    return {"access_token": make_jwt(db_user["id"])}
