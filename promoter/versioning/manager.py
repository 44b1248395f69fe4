"""
Version manager with file-based locking around the version descriptor.

The manager owns the read-modify-write cycle on a VersionStore. Writes made by
``bump`` are provisional: callers take a ``snapshot`` first and ``restore`` it
if the run that bumped the version does not succeed.
"""

import hashlib
import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Union

from filelock import FileLock, Timeout

from .exceptions import ParseError, VersionLockError, VersionStoreError
from .store import VersionStore, open_version_store
from .version import Version

logger = logging.getLogger(__name__)


class VersionManager:
    """
    Reads, increments and persists the project version.

    This class provides:
    - Patch increments persisted back to the descriptor
    - File-based locking so concurrent local runs cannot interleave writes
    - Snapshot/restore of the descriptor for provisional bumps
    """

    def __init__(
        self,
        store: Union[VersionStore, str, Path],
        lock_dir: Optional[Path] = None,
        lock_timeout: float = 30.0,
    ):
        """
        Initialize the version manager.

        Args:
            store: A VersionStore, or a descriptor path to open one from
            lock_dir: Directory for lock files (defaults to system temp)
            lock_timeout: Maximum time to wait for lock acquisition (seconds)
        """
        if isinstance(store, (str, Path)):
            store = open_version_store(store)
        self.store = store
        self.lock_timeout = lock_timeout

        if lock_dir is None:
            lock_dir = Path(tempfile.gettempdir()) / "promoter_locks"
        self.lock_dir = Path(lock_dir)
        self.lock_dir.mkdir(parents=True, exist_ok=True)

        digest = hashlib.sha1(
            str(self.store.path.resolve()).encode("utf-8")
        ).hexdigest()[:12]
        self.lock_file = self.lock_dir / f"{self.store.path.stem}-{digest}.lock"

    @contextmanager
    def acquire_lock(self):
        """
        Hold the descriptor lock for the duration of the block.

        Raises:
            VersionLockError: If lock cannot be acquired within timeout
        """
        lock = FileLock(str(self.lock_file), timeout=self.lock_timeout)
        try:
            lock.acquire()
        except Timeout as e:
            raise VersionLockError(
                str(self.lock_file), f"Timeout after {self.lock_timeout} seconds"
            ) from e
        try:
            yield lock
        finally:
            lock.release()

    def current(self) -> Version:
        """Return the persisted version."""
        with self.acquire_lock():
            return self.store.read()

    def next_version(self) -> Version:
        """Return the version a bump would produce, without writing it."""
        return self.current().increment_patch()

    def bump(self) -> Version:
        """
        Increment the patch component and persist it.

        Returns:
            The new version

        Raises:
            ParseError: If the descriptor is missing or malformed. Nothing is
                written in that case.
            VersionStoreError: If the new version cannot be written
        """
        with self.acquire_lock():
            previous = self.store.read()
            new_version = previous.increment_patch()
            try:
                self.store.write(new_version)
            except OSError as e:
                raise VersionStoreError(str(self.store.path), str(e)) from e

        logger.info(f"Version bumped from {previous} to {new_version}")
        return new_version

    def snapshot(self) -> bytes:
        """
        Capture the raw descriptor bytes so a provisional bump can be undone.

        Raises:
            ParseError: If the descriptor does not exist
        """
        path = self.store.path
        if not path.exists():
            raise ParseError(str(path), "file does not exist")
        try:
            return path.read_bytes()
        except OSError as e:
            raise ParseError(str(path), str(e)) from e

    def restore(self, snapshot: bytes) -> None:
        """
        Write back a descriptor captured by ``snapshot``.

        Raises:
            VersionStoreError: If the descriptor cannot be written
        """
        with self.acquire_lock():
            try:
                self.store.path.write_bytes(snapshot)
            except OSError as e:
                raise VersionStoreError(str(self.store.path), str(e)) from e
        logger.info(f"Restored {self.store.path} to its state before the run")
