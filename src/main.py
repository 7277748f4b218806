# ── src/main.py ───────────────────────────────────────────────────────────────
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from errors import register_error_handlers

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Logs API")

# ── CORS (robust + deploy-safe)
# Accept a comma/space-separated FRONTEND_ORIGIN list.
# Without one, fall back to "*" with allow_credentials=False; bearer headers still pass.
def _parse_origins(env_value: str) -> list[str]:
    if not env_value:
        return []
    # split by comma or whitespace, trim, drop empties and trailing slashes
    raw = [p.strip() for chunk in env_value.split(",") for p in chunk.split()]
    origins = []
    for o in raw:
        o = o.rstrip("/")
        if o and o not in origins:
            origins.append(o)
    return origins

_frontend_origins = _parse_origins(os.getenv("FRONTEND_ORIGIN", ""))

app.add_middleware(
    CORSMiddleware,
    allow_origins=_frontend_origins or ["*"],
    allow_credentials=bool(_frontend_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── shared error translator ------------------------------------------------
register_error_handlers(app)

# ── routers ----------------------------------------------------------------
from routers.logs.endpoints import router as logs_router  # noqa: E402
from routers.auth.endpoints import router as auth_router  # noqa: E402

app.include_router(logs_router)
app.include_router(auth_router)

# ── health / root ------------------------------------------------------------
@app.get("/healthz", include_in_schema=False)
def health_check():
    return JSONResponse({"status": "healthy"})

@app.get("/", include_in_schema=False)
def root():
    return {
        "status": "ok",
        "info": (
            "/healthz, /logs, /logs/{id}, /myLogs, "
            "/api/auth/register, /api/auth/login, /api/auth/me, /api/auth/change-password"
        ),
    }
