"""Create-or-replace of a resource document."""

import logging
from typing import Any

from ..models.config import ResourceKind
from .client import PostmanClient

logger = logging.getLogger("postsync.upsert")

CREATED = "created"
UPDATED = "updated"


def upsert(client: PostmanClient, kind: ResourceKind, uid: str | None, body: Any) -> str:
    """Create the resource when uid is None, otherwise replace it in full.

    Returns:
        CREATED or UPDATED

    Raises:
        PostmanAPIError: If the request fails
    """
    if uid is None:
        logger.debug("Creating %s", kind)
        client.create_resource(kind, body)
        return CREATED

    logger.debug("Replacing %s %s", kind, uid)
    client.replace_resource(kind, uid, body)
    return UPDATED
