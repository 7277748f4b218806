# ── src/routers/auth/change_password.py ───────────────────────────────────────
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from passlib.hash import sha256_crypt
from pydantic import BaseModel

import db
from .tokens import get_user_by_username, require_token

_logger = logging.getLogger(__name__)

# ────────────────────────── Schemas ──────────────────────────────────
class ChangePasswordIn(BaseModel):
    current_password: str
    new_password: str

class ChangePasswordOut(BaseModel):
    status: str = "ok"

# ─────────────────────────── Router ──────────────────────────────────
router = APIRouter(
    prefix="/api/auth",
    tags=["auth"],
)

@router.post("/change-password", response_model=ChangePasswordOut)
def change_password(payload: ChangePasswordIn, user: Dict[str, Any] = Depends(require_token)):
    """
    Change the current user's password.
    Issued tokens stay valid until they expire.
    """
    if not payload.new_password:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="new_password must not be empty")

    # require_token strips the hash; reload the full document
    doc = get_user_by_username(user["id"])
    if not doc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    if not sha256_crypt.verify(payload.current_password, doc.get("password", "")):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid current password")

    doc["password"] = sha256_crypt.hash(payload.new_password)
    db.users_container().upsert_item(doc)
    _logger.info("Password changed for %s", user["id"])

    return {"status": "ok"}
