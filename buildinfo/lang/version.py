"""Version, runtime and time formatting utilities."""

from __future__ import annotations

import logging
import platform
import sys
from datetime import datetime, timedelta, timezone
from importlib import metadata
from typing import Any

from packaging.requirements import InvalidRequirement, Requirement
from packaging.utils import canonicalize_name

from buildinfo.dto.module import ModuleVersion
from buildinfo.errors import BuildTimeError

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1

# One day inside the datetime range, so any local UTC offset still fits.
_EARLIEST = datetime.min.replace(tzinfo=timezone.utc) + timedelta(days=1)
_LATEST = datetime.max.replace(tzinfo=timezone.utc) - timedelta(days=1)


def get_runtime_info() -> dict[str, Any]:
    """Get runtime information.

    Returns:
        Dictionary with runtime metadata
    """
    return {
        "implementation": platform.python_implementation(),
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        "platform": sys.platform,
    }


def runtime_version() -> str:
    """Version of the interpreter running this process, e.g. ``CPython 3.12.1``."""
    info = get_runtime_info()
    return f"{info['implementation']} {info['python_version']}"


def parse_epoch_seconds(raw: str) -> int:
    """Parse injected build time text as a signed 64-bit integer.

    Accepts an optional sign, decimal digits, the ``0x``/``0o``/``0b``
    prefixed forms, the legacy leading-zero octal form (``"010"`` is 8) and
    ``_`` digit separators. Surrounding whitespace is rejected.

    Raises:
        BuildTimeError: if the text is not such an integer
    """
    if not raw or not raw.isascii() or raw != raw.strip():
        raise BuildTimeError(raw, "not an integer")

    sign = 1
    body = raw
    if body[0] in "+-":
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if not body or body[0] in "+-":
        raise BuildTimeError(raw, "not an integer")

    try:
        if len(body) > 1 and body[0] == "0" and (body[1].isdigit() or body[1] == "_"):
            digits = body[1:]
            if digits.startswith("_"):
                digits = digits[1:]
            value = int(digits, 8)
        else:
            value = int(body, 0)
    except ValueError:
        raise BuildTimeError(raw, "not an integer") from None

    value *= sign
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise BuildTimeError(raw, "value out of range")
    return value


def epoch_to_datetime(seconds: int) -> datetime:
    """Convert seconds since the Unix epoch to an aware UTC datetime."""
    try:
        value = EPOCH + timedelta(seconds=seconds)
    except OverflowError:
        raise BuildTimeError(str(seconds), "outside the representable date range") from None
    if not _EARLIEST <= value <= _LATEST:
        raise BuildTimeError(str(seconds), "outside the representable date range")
    return value


def format_time(value: datetime) -> str:
    """Render an instant in local time, e.g. ``2001-09-09 01:46:40 +0000 UTC``."""
    local = value.astimezone()
    return f"{local:%Y-%m-%d %H:%M:%S %z} {local.tzname()}"


def truncate_seconds(delta: timedelta) -> int:
    """Whole seconds in ``delta``, truncated toward zero."""
    micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
    seconds = abs(micros) // 1_000_000
    return -seconds if micros < 0 else seconds


def format_duration(seconds: int) -> str:
    """Render whole seconds as ``0s``, ``45s``, ``1m5s`` or ``26h3m0s``."""
    if seconds == 0:
        return "0s"
    sign = "-" if seconds < 0 else ""
    seconds = abs(seconds)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{sign}{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{sign}{minutes}m{secs}s"
    return f"{sign}{secs}s"


def _requirement_names(dist: metadata.Distribution) -> list[str]:
    names = []
    for requirement in dist.requires or ():
        try:
            parsed = Requirement(requirement)
        except InvalidRequirement:
            logger.debug("Skipping unparsable requirement %r of %s", requirement, dist.metadata["Name"])
            continue
        # No extra selected: extra-only requirements evaluate false.
        if parsed.marker is not None and not parsed.marker.evaluate({"extra": ""}):
            continue
        names.append(parsed.name)
    return names


def discover_modules(distribution: str) -> tuple[ModuleVersion, ...] | None:
    """Resolve the installed dependency closure of ``distribution``.

    Walks ``Requires-Dist`` entries recursively through
    :mod:`importlib.metadata`. Requirements whose environment markers do not
    match this interpreter (extra-only requirements included) and
    requirements that are not installed are skipped. The root distribution
    itself is not listed.

    Returns:
        Dependencies sorted by canonical name, or None when ``distribution``
        is not installed (no provenance available)
    """
    try:
        root = metadata.distribution(distribution)
    except metadata.PackageNotFoundError:
        logger.debug("Distribution %s not installed, no module manifest", distribution)
        return None

    seen = {canonicalize_name(distribution)}
    found: dict[str, ModuleVersion] = {}
    pending = _requirement_names(root)
    while pending:
        name = pending.pop()
        key = canonicalize_name(name)
        if key in seen:
            continue
        seen.add(key)
        try:
            dist = metadata.distribution(name)
        except metadata.PackageNotFoundError:
            continue
        found[key] = ModuleVersion(path=dist.metadata["Name"] or name, version=dist.version)
        pending.extend(_requirement_names(dist))

    logger.debug("Resolved %d modules for %s", len(found), distribution)
    return tuple(found[key] for key in sorted(found))
