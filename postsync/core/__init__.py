"""Core sync functionality."""

from .auth import PostmanAuth
from .client import PostmanAPIError, PostmanClient
from .locator import locate
from .operations import LocalDocumentError, SyncOperations, SyncResult
from .remote import RemoteFetcher, RemoteFetchError, archive_fetch, working_directory
from .sanitize import sanitize
from .upsert import upsert

__all__ = [
    "LocalDocumentError",
    "PostmanAPIError",
    "PostmanAuth",
    "PostmanClient",
    "RemoteFetchError",
    "RemoteFetcher",
    "SyncOperations",
    "SyncResult",
    "archive_fetch",
    "locate",
    "sanitize",
    "upsert",
    "working_directory",
]
