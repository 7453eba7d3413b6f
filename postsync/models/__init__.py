"""Data models for sync system."""

from .config import (
    COLLECTION,
    ENVIRONMENT,
    ConfigError,
    ConfigFileError,
    ConfigProvider,
    ExitCode,
    Resource,
    ResourceKind,
    SyncTarget,
)

__all__ = [
    "COLLECTION",
    "ENVIRONMENT",
    "ConfigError",
    "ConfigFileError",
    "ConfigProvider",
    "ExitCode",
    "Resource",
    "ResourceKind",
    "SyncTarget",
]
