# ── src/routers/logs/store.py ─────────────────────────────────────────
"""
Document access for the logs container (partition key /id).

Stored shape:
    {id, owner: <username>, createdAt, updatedAt, title, content, ...}
"""
import datetime
import logging
import uuid
from typing import Any, Dict, Iterable, List, Optional

from azure.cosmos import exceptions

import db

_logger = logging.getLogger(__name__)

# Keys a PATCH body can never overwrite
IMMUTABLE_FIELDS = ("id", "owner", "createdAt", "updatedAt") + db.SYSTEM_FIELDS

_LIST_QUERY = "SELECT * FROM c ORDER BY c.createdAt DESC"
_LIST_BY_OWNER_QUERY = "SELECT * FROM c WHERE c.owner = @owner ORDER BY c.createdAt DESC"


def _now_iso() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat(timespec="milliseconds")


# ── reads --------------------------------------------------------------
def list_logs(owner: Optional[str] = None) -> List[Dict[str, Any]]:
    """All logs newest first; restricted to `owner` at the store when given."""
    if owner is None:
        query, params = _LIST_QUERY, None
    else:
        query, params = _LIST_BY_OWNER_QUERY, [{"name": "@owner", "value": owner}]

    _logger.debug("Querying logs: %s (owner=%s)", query, owner)
    return list(db.logs_container().query_items(
        query=query,
        parameters=params,
        enable_cross_partition_query=True,
    ))


def get_log(log_id: str) -> Optional[Dict[str, Any]]:
    """Point read; None when the id does not exist."""
    try:
        return db.logs_container().read_item(item=log_id, partition_key=log_id)
    except exceptions.CosmosResourceNotFoundError:
        return None


# ── writes -------------------------------------------------------------
def create_log(fields: Dict[str, Any], owner: str) -> Dict[str, Any]:
    now = _now_iso()
    doc = {k: v for k, v in fields.items() if k not in IMMUTABLE_FIELDS}
    doc.update({
        "id":        uuid.uuid4().hex,
        "owner":     owner,
        "createdAt": now,
        "updatedAt": now,
    })
    created = db.logs_container().create_item(doc)
    _logger.info("Created log %s for %s", doc["id"], owner)
    return created


def clean_update_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Drop keys that cannot change (owner, ids, timestamps, system fields) and
    keys whose value is the empty string; "" means "leave as is".
    """
    return {
        k: v for k, v in fields.items()
        if k not in IMMUTABLE_FIELDS and v != ""
    }


def update_log(doc: Dict[str, Any], fields: Dict[str, Any]) -> Dict[str, Any]:
    changes = clean_update_fields(fields)
    updated = dict(doc)
    updated.update(changes)
    updated["updatedAt"] = _now_iso()

    result = db.logs_container().replace_item(item=doc["id"], body=db.strip_system_fields(updated))
    _logger.info("Updated log %s (%s)", doc["id"], ", ".join(sorted(changes)) or "no fields")
    return result


def delete_log(doc: Dict[str, Any]) -> None:
    db.logs_container().delete_item(item=doc["id"], partition_key=doc["id"])
    _logger.info("Deleted log %s", doc["id"])


# ── owner resolution ---------------------------------------------------
def resolve_owners(docs: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Replace each `owner` username with `{id, username}` (one read per distinct
    owner). Owners whose user document is gone resolve to None.
    """
    docs = list(docs)
    users: Dict[str, Optional[Dict[str, Any]]] = {}

    for owner in {d.get("owner") for d in docs if d.get("owner")}:
        try:
            user = db.users_container().read_item(item=owner, partition_key=owner)
            users[owner] = {"id": user["id"], "username": user.get("username", user["id"])}
        except exceptions.CosmosResourceNotFoundError:
            users[owner] = None

    out = []
    for d in docs:
        view = db.strip_system_fields(d)
        view["owner"] = users.get(d.get("owner"))
        out.append(view)
    return out


def resolve_owner(doc: Dict[str, Any]) -> Dict[str, Any]:
    return resolve_owners([doc])[0]
