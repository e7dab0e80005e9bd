"""Custom exception hierarchy."""

from typing import Optional


class DupScanError(Exception):
    """Base exception for all dupscan errors."""


class UsageError(DupScanError):
    """Malformed command line invocation."""


class ConfigError(DupScanError):
    """Configuration error."""


class PathError(DupScanError):
    """Failure tied to a specific filesystem path."""

    action = "access"

    def __init__(self, path: str, cause: Optional[BaseException] = None) -> None:
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to {self.action} {path}{detail}")


class TraversalError(PathError):
    """Error while listing or stating an entry during the walk."""

    action = "walk"


class ContentReadError(PathError):
    """Error while opening or reading a candidate file."""

    action = "read"
