"""Save and load operations between local files and Postman."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..models.config import Resource, SyncTarget
from .client import PostmanClient
from .locator import locate
from .sanitize import sanitize
from .upsert import CREATED, upsert

logger = logging.getLogger("postsync.operations")


class LocalDocumentError(Exception):
    """Raised when a local document cannot be read for upload."""


@dataclass
class SyncResult:
    """Result of a sync operation on one resource."""

    success: bool
    kind: str
    name: str
    operation: str  # "save" or "load"
    message: str
    filepath: str = ""
    skipped: bool = False  # Resource not found remotely
    created: bool = False
    dry_run: bool = False  # Nothing was written


class SyncOperations:
    """Handles save and load operations for the configured resources.

    Errors are not caught: a failure on the collection stops the run before
    the environment is touched, and nothing already written is rolled back.
    """

    def __init__(
        self,
        target: SyncTarget,
        client: PostmanClient | None = None,
        base_dir: Path | None = None,
    ) -> None:
        """Initialize sync operations.

        Args:
            target: Resources to sync
            client: PostmanClient (created if not provided)
            base_dir: Directory local paths are relative to (defaults to cwd at call time)
        """
        self.target = target
        self._client = client
        self.base_dir = base_dir

    @property
    def client(self) -> PostmanClient:
        """Get or create PostmanClient."""
        if self._client is None:
            self._client = PostmanClient()
        return self._client

    def _base(self, base_dir: Path | None) -> Path:
        return base_dir or self.base_dir or Path.cwd()

    @staticmethod
    def _write_document(path: Path, doc: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(doc, f, indent=2)
            f.write("\n")

    @staticmethod
    def _read_document(path: Path) -> Any:
        if not path.exists():
            raise LocalDocumentError(f"Local file not found: {path}")
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise LocalDocumentError(f"Invalid JSON in {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise LocalDocumentError(f"{path} is not UTF-8 text: {e}") from e
        except OSError as e:
            raise LocalDocumentError(f"Cannot read {path}: {e}") from e

    # =========================================================================
    # Save (remote -> local)
    # =========================================================================

    def save_resource(self, resource: Resource, base_dir: Path | None = None, dry_run: bool = False) -> SyncResult:
        """Download one resource, sanitize it and write it to its local path."""
        local_path = resource.resolve_path(self._base(base_dir))
        uid = locate(self.client, resource.kind, resource.name)

        if uid is None:
            return SyncResult(
                success=True,
                kind=resource.kind.key,
                name=resource.name,
                operation="save",
                message=f"{resource.kind.key.capitalize()} '{resource.name}' not found, skipping",
                filepath=resource.local_path,
                skipped=True,
            )

        doc = self.client.get_resource(resource.kind, uid)
        clean = sanitize(doc, strip_values=resource.kind.strip_values)

        if dry_run:
            return SyncResult(
                success=True,
                kind=resource.kind.key,
                name=resource.name,
                operation="save",
                message=f"Would write {resource.local_path}",
                filepath=resource.local_path,
                dry_run=True,
            )

        self._write_document(local_path, clean)
        logger.info("Saved %s %s to %s", resource.kind, uid, local_path)

        return SyncResult(
            success=True,
            kind=resource.kind.key,
            name=resource.name,
            operation="save",
            message=f"Saved to {resource.local_path}",
            filepath=resource.local_path,
        )

    def save(self, base_dir: Path | None = None, dry_run: bool = False) -> list[SyncResult]:
        """Save every configured resource, collection first.

        Raises:
            PostmanAPIError: On any API failure
        """
        return [self.save_resource(r, base_dir, dry_run) for r in self.target.resources()]

    # =========================================================================
    # Load (local -> remote)
    # =========================================================================

    def load_resource(self, resource: Resource, base_dir: Path | None = None, dry_run: bool = False) -> SyncResult:
        """Upload one local document, creating or replacing the remote resource."""
        local_path = resource.resolve_path(self._base(base_dir))
        uid = locate(self.client, resource.kind, resource.name)
        body = self._read_document(local_path)

        if dry_run:
            action = "create" if uid is None else f"replace {uid}"
            return SyncResult(
                success=True,
                kind=resource.kind.key,
                name=resource.name,
                operation="load",
                message=f"Would {action} from {resource.local_path}",
                filepath=resource.local_path,
                dry_run=True,
                created=uid is None,
            )

        outcome = upsert(self.client, resource.kind, uid, body)
        logger.info("Loaded %s from %s (%s)", resource.kind, local_path, outcome)

        return SyncResult(
            success=True,
            kind=resource.kind.key,
            name=resource.name,
            operation="load",
            message=f"{outcome.capitalize()} from {resource.local_path}",
            filepath=resource.local_path,
            created=outcome == CREATED,
        )

    def load(self, base_dir: Path | None = None, dry_run: bool = False) -> list[SyncResult]:
        """Load every configured resource, collection first.

        Raises:
            LocalDocumentError: If a local file is missing or invalid
            PostmanAPIError: On any API failure
        """
        return [self.load_resource(r, base_dir, dry_run) for r in self.target.resources()]
