"""
Version utility module for version string operations.

This module provides the release version used by the pipeline, relying on the
standard packaging.version library for parsing and ordering.
"""

import re

from packaging.version import Version as PackagingVersion, InvalidVersion

from .exceptions import VersionFormatError

_RELEASE_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")


class Version:
    """
    A release version (major.minor.patch) backed by packaging.version.

    Instances are immutable. Ordering and hashing delegate to the wrapped
    packaging Version, so ``Version("1.0.10") > Version("1.0.9")``.
    """

    __slots__ = ("_version",)

    def __init__(self, version_string: str):
        """
        Initialize a Version from a string.

        Args:
            version_string: Version string in format "x.y.z"

        Raises:
            VersionFormatError: If version string is not a plain release version
        """
        if isinstance(version_string, bool):
            raise VersionFormatError(version_string)

        original = str(version_string).strip()
        if not _RELEASE_PATTERN.match(original):
            raise VersionFormatError(original)

        try:
            version = PackagingVersion(original)
        except InvalidVersion as e:
            raise VersionFormatError(original) from e

        if version.is_prerelease or version.is_postrelease or version.is_devrelease:
            raise VersionFormatError(original)

        object.__setattr__(self, "_version", version)

    def __setattr__(self, name, value):
        raise AttributeError("Version objects are immutable")

    @classmethod
    def from_parts(cls, major: int, minor: int, patch: int) -> "Version":
        """Build a Version from its three components."""
        for part in (major, minor, patch):
            if isinstance(part, bool) or not isinstance(part, int) or part < 0:
                raise VersionFormatError(f"{major}.{minor}.{patch}")
        return cls(f"{major}.{minor}.{patch}")

    @property
    def major(self) -> int:
        """Major version component."""
        return self._version.major

    @property
    def minor(self) -> int:
        """Minor version component."""
        return self._version.minor

    @property
    def patch(self) -> int:
        """Patch version component."""
        return self._version.micro

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __repr__(self) -> str:
        return f"Version('{str(self)}')"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return (self.major, self.minor, self.patch) == (
            other.major,
            other.minor,
            other.patch,
        )

    def __lt__(self, other) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._version < other._version

    def __le__(self, other) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._version <= other._version

    def __gt__(self, other) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._version > other._version

    def __ge__(self, other) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._version >= other._version

    def __hash__(self) -> int:
        return hash(self._version)

    def increment_patch(self) -> "Version":
        """Return a new Version with incremented patch version."""
        return Version.from_parts(self.major, self.minor, self.patch + 1)
