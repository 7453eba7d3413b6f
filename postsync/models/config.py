"""Configuration and resource models for the sync system."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


DEFAULT_USER_CONFIG = Path.home() / ".postsync.yaml"
DEFAULT_PROJECT_CONFIG = Path("postsync.yaml")
DEFAULT_BASE_URL = "https://api.getpostman.com"


class ExitCode:
    """Process exit codes returned by the CLI."""

    OK = 0
    FAILURE = 1  # Transport, git or local file failure
    USAGE = 2
    NO_REMOTE_REPO = 3
    NO_USER_CONFIG = 4
    NO_API_KEY = 5
    NO_PROJECT_CONFIG = 6


class ConfigError(Exception):
    """Raised when a required setting is absent."""

    def __init__(self, setting: str, exit_code: int, message: str | None = None) -> None:
        super().__init__(message or f"Missing required setting: {setting}")
        self.setting = setting
        self.exit_code = exit_code


class ConfigFileError(ConfigError):
    """Raised when a config file exists but cannot be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(str(path), ExitCode.FAILURE, f"Invalid config file {path}: {reason}")
        self.path = path


@dataclass(frozen=True)
class ResourceKind:
    """One of the two resource types kept in sync."""

    key: str  # Envelope key on item endpoints ("collection")
    list_key: str  # Listing key and endpoint segment ("collections")
    strip_values: bool = False  # Blank out "value" fields on save

    @property
    def endpoint(self) -> str:
        """Listing/creation endpoint path."""
        return f"/{self.list_key}"

    def item_endpoint(self, uid: str) -> str:
        """Identifier-scoped endpoint path."""
        return f"/{self.list_key}/{uid}"

    def __str__(self) -> str:
        return self.key


COLLECTION = ResourceKind(key="collection", list_key="collections")
ENVIRONMENT = ResourceKind(key="environment", list_key="environments", strip_values=True)


@dataclass
class Resource:
    """A configured resource: looked up remotely by name, stored locally at local_path."""

    kind: ResourceKind
    name: str
    local_path: str

    def resolve_path(self, base_dir: Path) -> Path:
        """Local file path relative to base_dir."""
        return base_dir / self.local_path


class ConfigProvider:
    """User and project settings, read from two YAML files.

    The user file holds account settings (api_key, base_url); the project file
    names the resources to sync and where they live on disk.
    """

    def __init__(
        self,
        user: dict[str, Any] | None = None,
        project: dict[str, Any] | None = None,
    ) -> None:
        self.user = user or {}
        self.project = project or {}

    @staticmethod
    def _read_yaml(path: Path) -> dict[str, Any]:
        """Read a YAML mapping.

        Raises:
            ConfigFileError: If the file is unreadable, not YAML, or not a mapping
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            reason = str(e).splitlines()[0] if str(e) else type(e).__name__
            raise ConfigFileError(path, reason) from e
        if not isinstance(data, dict):
            raise ConfigFileError(path, "expected a mapping of settings")
        return data

    @classmethod
    def load(cls, user_path: Path | None = None, project_path: Path | None = None) -> "ConfigProvider":
        """Load both config files.

        Raises:
            ConfigError: If either file does not exist
            ConfigFileError: If either file cannot be parsed
        """
        if user_path is None:
            user_path = Path(os.getenv("POSTSYNC_USER_CONFIG", str(DEFAULT_USER_CONFIG)))
        project_path = project_path or DEFAULT_PROJECT_CONFIG

        if not user_path.exists():
            raise ConfigError(
                "user config",
                ExitCode.NO_USER_CONFIG,
                f"User config file not found: {user_path} (run 'postsync init')",
            )
        if not project_path.exists():
            raise ConfigError(
                "project config",
                ExitCode.NO_PROJECT_CONFIG,
                f"Project config file not found: {project_path} (run 'postsync init')",
            )

        return cls(user=cls._read_yaml(user_path), project=cls._read_yaml(project_path))

    def get_user(self, key: str, default: str = "") -> str:
        """Get a user-level setting as a string."""
        value = self.user.get(key)
        return default if value is None else str(value)

    def get_project(self, key: str, default: str = "") -> str:
        """Get a project-level setting as a string."""
        value = self.project.get(key)
        return default if value is None else str(value)

    @staticmethod
    def save_yaml(path: Path, data: dict[str, Any]) -> None:
        """Write settings to a YAML file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


@dataclass
class SyncTarget:
    """The resources active for the current run.

    A kind is active iff its configured name is non-empty.
    """

    collection: Resource | None = None
    environment: Resource | None = None
    remote_repo: str = ""
    remote_branch: str = "HEAD"

    @classmethod
    def from_config(cls, config: ConfigProvider) -> "SyncTarget":
        """Build the target set from project settings."""
        collection = None
        environment = None

        collection_name = config.get_project("collection_name")
        if collection_name:
            collection = Resource(
                kind=COLLECTION,
                name=collection_name,
                local_path=config.get_project("collection_path", "postman_collection.json"),
            )

        environment_name = config.get_project("environment_name")
        if environment_name:
            environment = Resource(
                kind=ENVIRONMENT,
                name=environment_name,
                local_path=config.get_project("environment_path", "postman_environment.json"),
            )

        return cls(
            collection=collection,
            environment=environment,
            remote_repo=config.get_project("remote_repo"),
            remote_branch=config.get_project("remote_branch", "HEAD"),
        )

    def resources(self) -> list[Resource]:
        """Active resources, collection first."""
        return [r for r in (self.collection, self.environment) if r is not None]

    def paths(self) -> list[str]:
        """Local paths of the active resources."""
        return [r.local_path for r in self.resources()]
