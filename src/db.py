# ── src/db.py ─────────────────────────────────────────────────────────────────
"""
Shared Cosmos DB access.

Every router used to open its own CosmosClient at import time; the client
and container proxies are now built lazily on first use and cached for the
process lifetime.

Environment:
- COSMOS_ENDPOINT   account URL (required once a container is touched)
- COSMOS_KEY        account key; DefaultAzureCredential() when unset
- COSMOS_DATABASE   database name            (default "logsdb")
- LOGS_CONTAINER    logs container, pk /id   (default "logs")
- USERS_CONTAINER   users container, pk /id  (default "users")
"""
import logging
import os
from typing import Any, Dict, Optional

from azure.cosmos import ContainerProxy, CosmosClient
from azure.identity import DefaultAzureCredential

_logger = logging.getLogger(__name__)

_database_name   = os.getenv("COSMOS_DATABASE", "logsdb")
LOGS_CONTAINER  = os.getenv("LOGS_CONTAINER", "logs")
USERS_CONTAINER = os.getenv("USERS_CONTAINER", "users")

# Cosmos adds these to every document it returns
SYSTEM_FIELDS = ("_rid", "_self", "_etag", "_attachments", "_ts")

_client: Optional[CosmosClient] = None
_containers: Dict[str, Any] = {}


def _build_client() -> CosmosClient:
    endpoint = os.getenv("COSMOS_ENDPOINT")
    if not endpoint:
        raise RuntimeError("COSMOS_ENDPOINT is not configured")

    key = os.getenv("COSMOS_KEY")
    if key:
        _logger.info("Connecting to Cosmos at %s with account key", endpoint)
        return CosmosClient(endpoint, credential=key)

    _logger.info("Connecting to Cosmos at %s with DefaultAzureCredential", endpoint)
    return CosmosClient(endpoint, credential=DefaultAzureCredential())


def get_container(name: str) -> ContainerProxy:
    """Return the cached container proxy for `name`, creating the client on first use."""
    global _client
    if name in _containers:
        return _containers[name]

    if _client is None:
        _client = _build_client()
    container = _client.get_database_client(_database_name).get_container_client(name)
    _containers[name] = container
    return container


def logs_container() -> ContainerProxy:
    return get_container(LOGS_CONTAINER)


def users_container() -> ContainerProxy:
    return get_container(USERS_CONTAINER)


def set_container(name: str, container: Any) -> None:
    """Install a container object under `name` (in-memory stand-ins, alternate accounts)."""
    _containers[name] = container


def reset_clients() -> None:
    global _client
    _client = None
    _containers.clear()


def strip_system_fields(doc: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in doc.items() if k not in SYSTEM_FIELDS}


__all__ = [
    "SYSTEM_FIELDS",
    "LOGS_CONTAINER",
    "USERS_CONTAINER",
    "get_container",
    "logs_container",
    "users_container",
    "set_container",
    "reset_clients",
    "strip_system_fields",
]
