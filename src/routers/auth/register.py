# ── src/routers/auth/register.py ─────────────────────────────────────────────
import datetime
import logging

from fastapi import APIRouter, status
from passlib.hash import sha256_crypt
from pydantic import BaseModel, EmailStr, Field

import db

_logger = logging.getLogger(__name__)

# ────────────────────────── Pydantic models ─────────────────────
class UserCreate(BaseModel):
    username: str      = Field(..., min_length=3, max_length=32, pattern=r"^[A-Za-z0-9_.-]+$")
    email:    EmailStr
    password: str      = Field(..., min_length=8)

class UserRead(BaseModel):
    id:       str
    username: str
    email:    EmailStr
    created:  datetime.datetime

# ───────────────────────── helper function ─────────────────────
def _hash_pwd(pwd: str) -> str:
    return sha256_crypt.hash(pwd)

# ──────────────────────────── Router ────────────────────────────
router = APIRouter(
    prefix="/api/auth",
    tags=["auth"]
)

@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(user: UserCreate):
    # username doubles as id and partition key for cheap point-reads
    doc = {
        "id":       user.username,
        "username": user.username,
        "email":    user.email,
        "password": _hash_pwd(user.password),
        "created":  datetime.datetime.now(datetime.timezone.utc).isoformat(),
    }

    # a duplicate username/e-mail raises CosmosResourceExistsError → 409
    db.users_container().create_item(doc)
    _logger.info("Registered user %s", user.username)

    return {k: doc[k] for k in ("id", "username", "email", "created")}
