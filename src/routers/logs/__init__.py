# ── src/routers/logs/__init__.py ──────────────────────────────────────
"""
Logs sub-router.

CRUD over the Cosmos "logs" container. Every route requires a bearer token;
only the owner of a log may change or delete it.

    GET    /logs        all logs, newest first
    GET    /logs/{id}   one log
    GET    /myLogs      the requester's logs, newest first
    POST   /logs        create (owner = requester)
    PATCH  /logs/{id}   partial update, owner only
    DELETE /logs/{id}   delete, owner only
"""
from .endpoints import router  # re-export for `include_router`
