"""
Versioning for promoter.

All version handling lives here so the pipeline, the collaborators and the
CLI share one set of rules:

1. **Core version logic** (version.py): ``Version``, a plain
   major.minor.patch release with ordering and increments.
2. **Build identifiers** (identifier.py): the ``{version}-{run}`` image tag
   of a single pipeline run.
3. **Version stores** (store.py): the persisted descriptor (Maven pom.xml or
   a YAML file) that holds the current version.
4. **Version management** (manager.py): locked read-modify-write on a store,
   plus snapshot/restore so a bump can stay provisional until a run succeeds.
5. **Exceptions** (exceptions.py): ``ParseError``, ``InvalidInputError``,
   ``VersionStoreError`` and friends, all under ``VersioningError``.
"""

from .exceptions import (
    VersioningError,
    ParseError,
    VersionFormatError,
    InvalidInputError,
    VersionLockError,
    VersionStoreError,
)
from .identifier import build_identifier, normalize_run_counter
from .manager import VersionManager
from .store import (
    VersionStore,
    PomVersionStore,
    YamlVersionStore,
    open_version_store,
)
from .version import Version

__all__ = [
    "VersionManager",
    # Stores
    "VersionStore",
    "PomVersionStore",
    "YamlVersionStore",
    "open_version_store",
    # Core version utilities
    "Version",
    "build_identifier",
    "normalize_run_counter",
    # Exceptions
    "VersioningError",
    "ParseError",
    "VersionFormatError",
    "InvalidInputError",
    "VersionLockError",
    "VersionStoreError",
]
