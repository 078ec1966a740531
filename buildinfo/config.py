"""Build metadata injected by the build pipeline.

CI supplies the values either as environment variables or by generating a
``buildinfo/_build_info.py`` module before packaging, for example:

    BUILD_TIME=$(date +%s)
    BUILD_HASH=$(git rev-parse --short HEAD)
    RELEASE_VERSION=${RELEASE_VERSION:-dev}
    BUILD_URL=${BUILD_URL:-}

Environment variables win over the generated module; anything left unset
keeps its default.
"""
from __future__ import annotations

import importlib
import logging
import os
from collections.abc import Mapping
from types import ModuleType
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from buildinfo.dto.module import ModuleVersion

logger = logging.getLogger(__name__)

GENERATED_MODULE = "buildinfo._build_info"

DEFAULT_BUILD_TIME = "0"
DEFAULT_BUILD_HASH = "dev"
DEFAULT_RELEASE_VERSION = "dev"

# field name -> environment variable
ENV_VARS = {
    "build_time_unix": "BUILD_TIME",
    "build_hash": "BUILD_HASH",
    "release_version": "RELEASE_VERSION",
    "build_url": "BUILD_URL",
    "distribution": "BUILDINFO_DISTRIBUTION",
}

# field name -> attribute of the generated module
MODULE_ATTRS = {
    "build_time_unix": "BUILD_TIME",
    "build_hash": "BUILD_HASH",
    "release_version": "RELEASE_VERSION",
    "build_url": "BUILD_URL",
    "distribution": "DISTRIBUTION",
    "modules": "MODULES",
}


class BuildConfig(BaseModel):
    """Raw build metadata, held as opaque text.

    build_time_unix stays unparsed here; parsing happens once, when the
    registry is built, so the literal "0" can still be told apart from
    other spellings of the epoch.
    """
    model_config = ConfigDict(frozen=True)

    build_time_unix: str = DEFAULT_BUILD_TIME
    build_hash: str = DEFAULT_BUILD_HASH
    release_version: str = DEFAULT_RELEASE_VERSION
    build_url: str = ""
    distribution: Optional[str] = None
    modules: Optional[tuple[ModuleVersion, ...]] = None

    @field_validator("modules", mode="before")
    @classmethod
    def _coerce_modules(cls, value: Any) -> Any:
        if value is None:
            return None
        coerced = []
        for item in value:
            if isinstance(item, ModuleVersion):
                coerced.append(item)
            elif isinstance(item, Mapping):
                coerced.append(ModuleVersion(path=item["path"], version=item["version"]))
            else:
                path, version = item
                coerced.append(ModuleVersion(path=path, version=version))
        return tuple(coerced)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BuildConfig:
        """Build a config from environment variables.

        Unset and empty variables both keep the field default.
        """
        environ = os.environ if environ is None else environ
        values = {field: environ[var] for field, var in ENV_VARS.items() if environ.get(var)}
        return cls(**values)

    @classmethod
    def from_module(cls, module: ModuleType) -> BuildConfig:
        """Build a config from the upper-case attributes of a generated module."""
        values = {
            field: getattr(module, attr)
            for field, attr in MODULE_ATTRS.items()
            if getattr(module, attr, None) is not None
        }
        return cls(**values)

    @classmethod
    def load(cls, environ: Mapping[str, str] | None = None) -> BuildConfig:
        """Generated module values, overridden by environment variables."""
        config = cls()
        generated = _import_generated()
        if generated is not None:
            logger.debug("Loading build metadata from %s", GENERATED_MODULE)
            config = cls.from_module(generated)
        return config.merged(cls.from_env(environ))

    def merged(self, other: BuildConfig) -> BuildConfig:
        """Copy of this config with the fields explicitly set on ``other``."""
        update = {name: getattr(other, name) for name in other.model_fields_set}
        return self.model_copy(update=update)


def _import_generated() -> ModuleType | None:
    try:
        return importlib.import_module(GENERATED_MODULE)
    except ModuleNotFoundError as exc:
        # Errors raised inside an existing generated module must surface.
        if exc.name != GENERATED_MODULE:
            raise
        return None
