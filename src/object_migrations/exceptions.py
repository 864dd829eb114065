"""
Custom exceptions for the object_migrations package.

This module defines a hierarchy of exceptions so callers can tell
migration failures apart from arbitrary errors and branch on them.
"""

from typing import Any


def _label(version: Any) -> str:
    """Render a version for error messages (class name for type tags)."""
    if isinstance(version, type):
        return version.__name__
    return repr(version)


class MigratorError(Exception):
    """
    Base exception for all migrator-related errors.

    All custom exceptions in the package inherit from this class.
    """

    pass


class ConfigurationError(MigratorError):
    """
    Raised when there are configuration-related issues.

    This exception is used when:
    - Environment variables hold invalid values
    - A log directory cannot be created
    """

    pass


class NoMigrationStepsError(MigratorError):
    """
    Raised when no step chain connects two versions in a direction.

    Covers both cases:
    - No step is registered at all from the origin version
    - The chain reaches a dead end (or loops) before the target version

    Attributes:
        from_version: Version the object was requested to migrate from
        to_version: Version the object was requested to migrate to
    """

    def __init__(self, from_version: Any, to_version: Any):
        self.from_version = from_version
        self.to_version = to_version
        super().__init__(
            f"No migration steps from version {_label(from_version)} "
            f"to {_label(to_version)}"
        )


class MigrationError(MigratorError):
    """
    Raised when a step's migration function fails during execution.

    The versions recorded are the overall requested pair, not the
    failing step's own versions.

    Attributes:
        from_version: Version the object was requested to migrate from
        to_version: Version the object was requested to migrate to
        cause: The exception raised by the step
    """

    def __init__(self, from_version: Any, to_version: Any, cause: BaseException):
        self.from_version = from_version
        self.to_version = to_version
        self.cause = cause
        super().__init__(
            f"Error raised while migrating an object from version "
            f"{_label(from_version)} to {_label(to_version)}: {cause!r}"
        )
