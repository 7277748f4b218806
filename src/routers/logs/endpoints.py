# ── src/routers/logs/endpoints.py ─────────────────────────────────────
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, ConfigDict, Field

import db
from errors import handle_404, require_ownership
from routers.auth.tokens import require_token

from . import store

# ── Pydantic payloads --------------------------------------------------
class LogIn(BaseModel):
    # loosely schematized: anything beyond title/content is stored as sent
    model_config = ConfigDict(extra="allow")

    title:   str = Field(..., min_length=1, description="Short headline")
    content: str = Field(..., description="Free-text log body")

class LogCreateRequest(BaseModel):
    log: LogIn

class LogUpdateRequest(BaseModel):
    log: Dict[str, Any] = Field(..., description="Fields to change; empty strings are ignored")

class LogOwner(BaseModel):
    id:       str
    username: str

class LogOut(BaseModel):
    model_config = ConfigDict(extra="allow")

    id:        str
    owner:     Optional[LogOwner] = None
    createdAt: str
    updatedAt: Optional[str] = None

class LogResponse(BaseModel):
    log: LogOut

class LogListResponse(BaseModel):
    logs: List[LogOut]

# ── Router -------------------------------------------------------------
router = APIRouter(tags=["logs"])

# INDEX
@router.get("/logs", response_model=LogListResponse, summary="List all logs, newest first")
def index_logs(user: Dict[str, Any] = Depends(require_token)):
    return {"logs": store.resolve_owners(store.list_logs())}

# SHOW
@router.get("/logs/{log_id}", response_model=LogResponse, summary="Fetch one log")
def show_log(log_id: str, user: Dict[str, Any] = Depends(require_token)):
    doc = handle_404(store.get_log(log_id))
    return {"log": store.resolve_owner(doc)}

# INDEX (mine)
@router.get("/myLogs", response_model=LogListResponse, summary="List the requester's logs, newest first")
def index_my_logs(user: Dict[str, Any] = Depends(require_token)):
    return {"logs": store.resolve_owners(store.list_logs(owner=user["id"]))}

# CREATE
@router.post(
    "/logs",
    response_model=LogResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a log owned by the requester",
)
def create_log(payload: LogCreateRequest, user: Dict[str, Any] = Depends(require_token)):
    # any client-supplied owner is overwritten by the requester
    doc = store.create_log(payload.log.model_dump(), owner=user["id"])

    view = db.strip_system_fields(doc)
    view["owner"] = {"id": user["id"], "username": user.get("username", user["id"])}
    return {"log": view}

# UPDATE
@router.patch(
    "/logs/{log_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Update a log (owner only)",
)
def update_log(log_id: str, payload: LogUpdateRequest, user: Dict[str, Any] = Depends(require_token)):
    fields = dict(payload.log)
    fields.pop("owner", None)

    doc = handle_404(store.get_log(log_id))
    require_ownership(user, doc)
    store.update_log(doc, fields)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# DESTROY
@router.delete(
    "/logs/{log_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a log (owner only)",
)
def destroy_log(log_id: str, user: Dict[str, Any] = Depends(require_token)):
    doc = handle_404(store.get_log(log_id))
    require_ownership(user, doc)
    store.delete_log(doc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
