"""Build report data model and converters.

Captures every build value at a single instant so status endpoints and CLI
commands can serialize one consistent view.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict

from buildinfo.dto.module import ModuleVersion

if TYPE_CHECKING:
    from buildinfo.registry import BuildInfoRegistry


@dataclass(slots=True)
class BuildSnapshot:  # pylint: disable=too-many-instance-attributes
    """Build metadata and uptime as seen at ``captured_at``.

    build_time is None when no build time was injected.
    """
    build_hash: str
    release_version: str
    build_time: datetime | None
    build_url: str
    startup_time: datetime
    captured_at: datetime
    uptime_seconds: int
    runtime_version: str
    modules: tuple[ModuleVersion, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        """Serialize BuildSnapshot to dict for JSON, logging, etc."""
        return {
            'build_hash': self.build_hash,
            'release_version': self.release_version,
            'build_time': self.build_time.isoformat() if self.build_time else None,
            'build_url': self.build_url or None,
            'startup_time': self.startup_time.isoformat(),
            'uptime_seconds': self.uptime_seconds,
            'runtime_version': self.runtime_version,
            'modules': [module.to_dict() for module in self.modules],
        }


class BuildInfoResponse(BaseModel):
    """HTTP response model for build information."""
    build_hash: str
    release_version: str
    build_time: Optional[str] = None    # ISO format, absent for dev builds
    build_url: Optional[str] = None
    startup_time: str                   # ISO format
    uptime_seconds: int
    runtime_version: str
    modules: list[dict] = []

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "build_hash": "abc123",
                "release_version": "v1.2.3",
                "build_time": "2001-09-09T01:46:40+00:00",
                "build_url": "https://ci.example.com/builds/42",
                "startup_time": "2024-01-15T09:30:00+00:00",
                "uptime_seconds": 3725,
                "runtime_version": "CPython 3.12.1",
                "modules": [
                    {"path": "pydantic", "version": "2.7.1"},
                    {"path": "pydantic_core", "version": "2.18.2"}
                ]
            }
        }
    )


class BuildInfoConverter:
    """Centralized converter for BuildSnapshot."""

    @staticmethod
    def from_registry(registry: BuildInfoRegistry, now: datetime | None = None) -> BuildSnapshot:
        """Capture the registry's values at one instant.

        Args:
            registry: Initialized build info registry
            now: Capture time; defaults to the registry's clock

        Returns:
            BuildSnapshot domain model
        """
        now = registry.now() if now is None else now
        return BuildSnapshot(
            build_hash=registry.build_hash(),
            release_version=registry.release_version(),
            build_time=registry.build_time() if registry.has_build_time() else None,
            build_url=registry.build_url(),
            startup_time=registry.startup_time(),
            captured_at=now,
            uptime_seconds=registry.uptime_seconds(now),
            runtime_version=registry.runtime_version(),
            modules=registry.modules(),
        )

    @staticmethod
    def to_response(snapshot: BuildSnapshot) -> BuildInfoResponse:
        """Convert BuildSnapshot domain model to HTTP response.

        Args:
            snapshot: BuildSnapshot domain model

        Returns:
            BuildInfoResponse (Pydantic model) ready for JSON serialization
        """
        return BuildInfoResponse(**snapshot.to_dict())

    @staticmethod
    def to_dict(snapshot: BuildSnapshot) -> dict:
        """Convert BuildSnapshot to dict (delegates to BuildSnapshot.to_dict())."""
        return snapshot.to_dict()
