# ── src/routers/auth/endpoints.py ────────────────────────────────────────────
"""
Aggregator – one import path for main.py
(from routers.auth.endpoints import router as auth_router)
while delegating to the dedicated modules.
"""
from fastapi import APIRouter

from .register        import router as register_router
from .login           import router as login_router
from .me              import router as me_router
from .change_password import router as change_password_router

router = APIRouter()

router.include_router(register_router)
router.include_router(login_router)
router.include_router(me_router)
router.include_router(change_password_router)
