"""Custom exceptions for dll-bundler."""

from __future__ import annotations


class BundlerError(Exception):
    """Base exception for all bundler errors."""


class UsageError(BundlerError):
    """Raised when the tool is invoked without a binary or search paths."""


class BinaryReadError(BundlerError):
    """Raised when a binary's architecture and imports cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class CannotOpenError(BinaryReadError):
    """Raised when the file cannot be opened at all."""


class MalformedImageError(BinaryReadError):
    """Raised when the file is not a recognized PE image."""


class RootUnreadableError(BundlerError):
    """Raised when the root binary cannot be read. Nothing is bundled."""

    def __init__(self, cause: BinaryReadError):
        self.cause = cause
        super().__init__(str(cause))
