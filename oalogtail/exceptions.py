"""Application-specific exceptions for oalogtail.

Only failures to start watching are raised to callers. Problems while
tailing a single file are logged and recovered from locally so the event
stream stays alive.

Exception Hierarchy:
    OaLogTailError (base)
    ├── WatchError
    │   ├── WatchDirectoryNotFoundError
    │   └── WatchStartError
    └── ConfigurationError
"""

from pathlib import Path


class OaLogTailError(Exception):
    """Base exception for all oalogtail errors.

    All application-specific exceptions inherit from this class,
    allowing callers to catch all oalogtail errors with a single handler.
    """


class WatchError(OaLogTailError):
    """Base exception for errors while setting up a log directory watch."""


class WatchDirectoryNotFoundError(WatchError):
    """Raised when the log directory does not exist or is not a directory.

    Attributes:
        path: The directory that was requested.
        message: Human-readable error description.
    """

    def __init__(self, path: Path, message: str | None = None) -> None:
        self.path = path
        self.message = message or f"Log directory not found at {path}"
        super().__init__(self.message)


class WatchStartError(WatchError):
    """Raised when the initial inventory of the log directory fails.

    Attributes:
        path: The directory that could not be listed.
        message: Human-readable error description.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        path: Path,
        message: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.path = path
        self.cause = cause
        self.message = message or f"Failed to start watching {path}"
        if cause:
            self.message = f"{self.message}: {cause}"
        super().__init__(self.message)


class ConfigurationError(OaLogTailError):
    """Raised when there is a configuration error.

    Attributes:
        parameter: The configuration parameter that is invalid.
        message: Human-readable error description.
    """

    def __init__(self, parameter: str, message: str | None = None) -> None:
        self.parameter = parameter
        self.message = message or f"Invalid configuration for '{parameter}'"
        super().__init__(self.message)
