"""Module (dependency) version data model."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ModuleVersion:
    """One entry of the dependency manifest compiled into a build.

    Path is the distribution name as published, version is opaque text.
    """
    path: str
    version: str

    def to_dict(self) -> dict:
        """Serialize ModuleVersion to dict for JSON responses."""
        return {
            'path': self.path,
            'version': self.version,
        }
