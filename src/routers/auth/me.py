# ── src/routers/auth/me.py ───────────────────────────────────────────────────
import datetime
from typing import Any, Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel, EmailStr

from .tokens import require_token

class UserMeOut(BaseModel):
    id: str
    username: str
    email: EmailStr
    created: datetime.datetime

router = APIRouter(
    prefix="/api/auth",
    tags=["auth"]
)

@router.get("/me", response_model=UserMeOut)
def me(user: Dict[str, Any] = Depends(require_token)):
    """Current-user profile. Requires: Authorization: Bearer <JWT>."""
    return user
