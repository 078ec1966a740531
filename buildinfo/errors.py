"""Exceptions raised while initializing build information."""


class BuildInfoError(Exception):
    """Base class for build information errors."""


class BuildTimeError(BuildInfoError, ValueError):
    """The injected build time is not a valid integer number of seconds.

    Raised once, during initialization. It is never turned into a default
    time: a malformed build time means the build pipeline is broken and the
    process should not start.
    """

    def __init__(self, raw: str, reason: str) -> None:
        super().__init__(f"invalid build time {raw!r}: {reason}")
        self.raw = raw
        self.reason = reason


class AlreadyInitializedError(BuildInfoError, RuntimeError):
    """initialize() was called after the registry had been built."""
