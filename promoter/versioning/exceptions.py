"""
Exception classes for the versioning module.
"""

from typing import Any

from promoter.exceptions import PromotionError


class VersioningError(PromotionError):
    """Base exception for all versioning-related errors."""

    pass


class ParseError(VersioningError):
    """Raised when the persisted version descriptor is missing or malformed."""

    def __init__(self, source: str, message: str = ""):
        self.source = source
        if message:
            super().__init__(f"Cannot read version from {source}: {message}")
        else:
            super().__init__(f"Cannot read version from {source}")


class VersionFormatError(ParseError):
    """Raised when a version string is not a plain major.minor.patch release."""

    def __init__(self, version_string: Any, expected_format: str = "x.y.z"):
        self.version_string = version_string
        self.expected_format = expected_format
        VersioningError.__init__(
            self,
            f"Invalid version format: '{version_string}'. "
            f"Expected format: {expected_format}",
        )
        self.source = str(version_string)


class VersionStoreError(VersioningError):
    """Raised when the version descriptor cannot be written."""

    def __init__(self, target: str, message: str = ""):
        self.target = target
        if message:
            super().__init__(f"Cannot write version to {target}: {message}")
        else:
            super().__init__(f"Cannot write version to {target}")


class InvalidInputError(VersioningError):
    """Raised when build identifier inputs are unset or out of range."""

    pass


class VersionLockError(VersioningError):
    """Raised when unable to acquire the version descriptor lock."""

    def __init__(self, lock_file: str, message: str = ""):
        self.lock_file = lock_file
        if message:
            super().__init__(f"Lock error for {lock_file}: {message}")
        else:
            super().__init__(f"Could not acquire lock for {lock_file}")
