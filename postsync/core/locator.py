"""Resolve a resource name to its remote identifier."""

import logging

from ..models.config import ResourceKind
from .client import PostmanClient

logger = logging.getLogger("postsync.locator")


def locate(client: PostmanClient, kind: ResourceKind, name: str) -> str | None:
    """Find the uid of the first remote resource named exactly `name`.

    Names are not unique on the service; when several match, the first one in
    listing order wins.

    Returns:
        The uid, or None when nothing matches

    Raises:
        PostmanAPIError: If the listing request fails
    """
    summaries = client.list_resources(kind)
    matches = [s for s in summaries if s.get("name") == name]

    if not matches:
        logger.debug("No %s named %r among %d entries", kind, name, len(summaries))
        return None

    if len(matches) > 1:
        logger.warning("%d %ss named %r, using the first", len(matches), kind, name)

    return matches[0].get("uid")
