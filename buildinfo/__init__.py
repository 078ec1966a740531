"""Build Info - build metadata and uptime for a running program.

This package provides:
- Accessors: release_version, build_hash, build_time, build_url, startup_time
- Reports: basic_info, full_info, module_info (tab-aligned text)
- Registry: BuildInfoRegistry, initialize, get_registry
- Config: BuildConfig (environment variables or generated _build_info module)
- DTOs: ModuleVersion, BuildSnapshot, BuildInfoResponse, BuildInfoConverter

Usage:
    import buildinfo

    buildinfo.initialize()          # optional; otherwise built on first read
    print(buildinfo.full_info())
"""

# Imported first so the startup time precedes every other import.
from ._startup import STARTUP_TIME  # isort: skip
from .registry import (
    BuildInfoRegistry,
    initialize,
    get_registry,
    release_version,
    build_hash,
    build_time,
    build_url,
    startup_time,
    modules,
    module_info,
    basic_info,
    full_info,
)
from .config import BuildConfig
from .errors import AlreadyInitializedError, BuildInfoError, BuildTimeError
from .dto import (
    ModuleVersion,
    BuildSnapshot,
    BuildInfoResponse,
    BuildInfoConverter,
)

__all__ = [
    # Registry
    "BuildInfoRegistry",
    "initialize",
    "get_registry",
    "STARTUP_TIME",
    # Accessors
    "release_version",
    "build_hash",
    "build_time",
    "build_url",
    "startup_time",
    "modules",
    # Reports
    "module_info",
    "basic_info",
    "full_info",
    # Config
    "BuildConfig",
    # Errors
    "BuildInfoError",
    "BuildTimeError",
    "AlreadyInitializedError",
    # DTOs
    "ModuleVersion",
    "BuildSnapshot",
    "BuildInfoResponse",
    "BuildInfoConverter",
]
