"""Fetch snapshot files from a git repository and load them."""

import io
import logging
import os
import subprocess
import tarfile
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from ..models.config import ConfigError, ExitCode, SyncTarget
from .operations import SyncOperations, SyncResult

logger = logging.getLogger("postsync.remote")


class RemoteFetchError(Exception):
    """Raised when files cannot be retrieved from the remote repository."""


@contextmanager
def working_directory(path: Path) -> Iterator[Path]:
    """Change the working directory, restoring it on exit."""
    previous = Path.cwd()
    os.chdir(path)
    try:
        yield path
    finally:
        os.chdir(previous)


def archive_fetch(repo: str, branch: str, paths: list[str], dest: Path) -> None:
    """Extract `paths` as of `branch` in `repo` into dest, keeping relative layout.

    Raises:
        RemoteFetchError: If git fails or returns an unreadable archive
    """
    cmd = ["git", "archive", "--format=tar", f"--remote={repo}", branch, "--", *paths]
    logger.debug("Running %s", " ".join(cmd))

    try:
        proc = subprocess.run(cmd, check=False, capture_output=True)
    except OSError as e:
        raise RemoteFetchError(f"Could not run git: {e}") from e

    if proc.returncode != 0:
        stderr = proc.stderr.decode("utf-8", errors="replace").strip()
        raise RemoteFetchError(f"git archive failed ({proc.returncode}): {stderr}")

    try:
        with tarfile.open(fileobj=io.BytesIO(proc.stdout), mode="r:") as archive:
            archive.extractall(dest, filter="data")
    except tarfile.TarError as e:
        raise RemoteFetchError(f"Invalid archive from {repo}: {e}") from e


class RemoteFetcher:
    """Pulls the configured snapshot files from `remote_repo`, then runs load."""

    def __init__(self, operations: SyncOperations) -> None:
        self.operations = operations

    @property
    def target(self) -> SyncTarget:
        return self.operations.target

    def load_remote(self, dry_run: bool = False) -> list[SyncResult]:
        """Fetch configured files into a scratch directory and load them.

        Returns:
            Load results; empty when no resource is configured

        Raises:
            ConfigError: If remote_repo is not configured
            RemoteFetchError: If the files cannot be fetched
        """
        if not self.target.remote_repo:
            raise ConfigError("remote_repo", ExitCode.NO_REMOTE_REPO)

        paths = self.target.paths()
        if not paths:
            logger.info("No resources configured, nothing to fetch")
            return []

        with tempfile.TemporaryDirectory(prefix="postsync-") as tmp:
            scratch = Path(tmp)
            archive_fetch(self.target.remote_repo, self.target.remote_branch, paths, scratch)
            with working_directory(scratch):
                return self.operations.load(base_dir=scratch, dry_run=dry_run)
