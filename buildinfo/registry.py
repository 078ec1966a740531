"""Process-wide build information registry.

All fallible work (parsing the build time) and all static rendering happen
once, when the registry is built. Afterwards the registry is immutable and
safe to read from any thread; only basic_info() and full_info() touch the
clock.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime, timezone

from buildinfo._startup import STARTUP_TIME
from buildinfo.config import DEFAULT_BUILD_TIME, BuildConfig
from buildinfo.dto.module import ModuleVersion
from buildinfo.errors import AlreadyInitializedError, BuildTimeError
from buildinfo.lang.version import (
    discover_modules,
    epoch_to_datetime,
    format_duration,
    format_time,
    parse_epoch_seconds,
    runtime_version as current_runtime_version,
    truncate_seconds,
)
from buildinfo.tabwriter import TabWriter, align

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BuildInfoRegistry:
    """Build metadata plus the reports derived from it.

    Args:
        config: Injected metadata; defaults to BuildConfig.load()
        startup_time: Instant the process started; defaults to the time
            the buildinfo package was imported
        clock: Source of the current time for the uptime and build age rows

    Raises:
        BuildTimeError: if config.build_time_unix is not an integer
    """

    def __init__(
        self,
        config: BuildConfig | None = None,
        *,
        startup_time: datetime | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._startup_time = STARTUP_TIME if startup_time is None else startup_time
        self._clock = clock
        self._config = BuildConfig.load() if config is None else config

        try:
            self._build_time = epoch_to_datetime(parse_epoch_seconds(self._config.build_time_unix))
        except BuildTimeError:
            logger.error("Refusing to start with build time %r", self._config.build_time_unix)
            raise

        self._runtime_version = current_runtime_version()
        self._static_info = self._render_static_info()

        if self._config.modules is not None:
            self._modules = self._config.modules
        elif self._config.distribution:
            self._modules = discover_modules(self._config.distribution)
        else:
            self._modules = None
        self._module_info = self._render_module_info()

        logger.debug(
            "Build info initialized: hash=%s version=%s time=%s",
            self._config.build_hash, self._config.release_version, self._config.build_time_unix,
        )

    def _render_static_info(self) -> str:
        rows = [
            f"Build Hash:\t{self._config.build_hash}\n",
            f"Release Version:\t{self._config.release_version}\n",
            f"Python Version:\t{self._runtime_version}\n",
        ]
        if self._config.build_url:
            rows.append(f"Build URL:\t{self._config.build_url}\n")
        return "".join(rows)

    def _render_module_info(self) -> str:
        if self._modules is None:
            return ""
        rows = "".join(f"{module.path}\t{module.version}\n" for module in self._modules)
        return "Modules:\n" + align(rows)

    @property
    def config(self) -> BuildConfig:
        return self._config

    def release_version(self) -> str:
        """Injected release version, "dev" when none was injected."""
        return self._config.release_version

    def build_hash(self) -> str:
        """Injected build hash, "dev" when none was injected."""
        return self._config.build_hash

    def build_time(self) -> datetime:
        """Instant the build was made; the epoch when none was injected."""
        return self._build_time

    def build_url(self) -> str:
        """URL of the CI build record. May be empty."""
        return self._config.build_url

    def startup_time(self) -> datetime:
        return self._startup_time

    def runtime_version(self) -> str:
        return self._runtime_version

    def modules(self) -> tuple[ModuleVersion, ...]:
        """Dependency manifest; empty when no provenance is available."""
        return self._modules or ()

    def module_info(self) -> str:
        """Table of modules and versions, or "" without provenance."""
        return self._module_info

    def now(self) -> datetime:
        return self._clock()

    def has_build_time(self) -> bool:
        """False when the build time was left at its "0" default."""
        return self._config.build_time_unix != DEFAULT_BUILD_TIME

    def uptime_seconds(self, now: datetime | None = None) -> int:
        now = self.now() if now is None else now
        return truncate_seconds(now - self._startup_time)

    def basic_info(self, now: datetime | None = None) -> str:
        """Build time, uptime and the static build rows as one aligned table."""
        now = self.now() if now is None else now
        writer = TabWriter()
        if self.has_build_time():
            age = format_duration(truncate_seconds(now - self._build_time))
            writer.write(f"Build Time:\t{format_time(self._build_time)} ({age} ago)\n")
        uptime = self.uptime_seconds(now)
        if uptime != 0:
            writer.write(f"Server Uptime:\t{format_duration(uptime)}\n")
        writer.write(self._static_info)
        return writer.flush()

    def full_info(self, now: datetime | None = None) -> str:
        """basic_info(), a blank line, then module_info()."""
        return self.basic_info(now) + "\n" + self._module_info


_registry: BuildInfoRegistry | None = None
_lock = threading.Lock()


def initialize(config: BuildConfig | None = None) -> BuildInfoRegistry:
    """Build the process-wide registry. Call once, before spawning workers.

    Raises:
        AlreadyInitializedError: if the registry already exists
        BuildTimeError: if the build time is malformed
    """
    global _registry  # pylint: disable=global-statement
    with _lock:
        if _registry is not None:
            raise AlreadyInitializedError("build info registry is already initialized")
        _registry = BuildInfoRegistry(config)
        return _registry


def get_registry() -> BuildInfoRegistry:
    """Process-wide registry, built from BuildConfig.load() on first use."""
    global _registry  # pylint: disable=global-statement
    registry = _registry
    if registry is not None:
        return registry
    with _lock:
        if _registry is None:
            _registry = BuildInfoRegistry()
        return _registry


def release_version() -> str:
    return get_registry().release_version()


def build_hash() -> str:
    return get_registry().build_hash()


def build_time() -> datetime:
    return get_registry().build_time()


def build_url() -> str:
    return get_registry().build_url()


def startup_time() -> datetime:
    return get_registry().startup_time()


def modules() -> tuple[ModuleVersion, ...]:
    return get_registry().modules()


def module_info() -> str:
    return get_registry().module_info()


def basic_info() -> str:
    return get_registry().basic_info()


def full_info() -> str:
    return get_registry().full_info()
