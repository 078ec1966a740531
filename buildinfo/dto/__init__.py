"""Data Transfer Objects for status endpoints and internal use."""

from .module import ModuleVersion
from .report import BuildSnapshot, BuildInfoResponse, BuildInfoConverter

__all__ = [
    # Domain Models
    "ModuleVersion",
    "BuildSnapshot",
    # Response Models (HTTP)
    "BuildInfoResponse",
    # Converters
    "BuildInfoConverter",
]
