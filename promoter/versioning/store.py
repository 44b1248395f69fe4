"""
Version stores: the persisted project descriptor holding the current version.

Two descriptor formats are supported:

- Maven ``pom.xml``: the project-level ``<version>`` element (a direct child of
  ``<project>``). Parent and dependency versions are never touched, and the
  file is edited in place so formatting and comments survive.
- YAML descriptors with a top-level ``version:`` key.
"""

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Protocol, Tuple, Union

import yaml

from .exceptions import ParseError, VersionFormatError
from .version import Version


class VersionStore(Protocol):
    """Minimal interface for a persisted version descriptor."""

    @property
    def path(self) -> Path:
        """Descriptor file backing this store."""
        ...

    def read(self) -> Version:
        """Return the persisted version, raising ParseError if unreadable."""
        ...

    def write(self, version: Version) -> None:
        """Persist a new version."""
        ...


# Markup tokens we must step over when tracking element depth in a pom.
_XML_TOKEN = re.compile(
    r"<!--.*?-->"
    r"|<!\[CDATA\[.*?\]\]>"
    r"|<\?.*?\?>"
    r"|<!DOCTYPE[^>]*>"
    r"|<(/?)([A-Za-z_][\w.:-]*)[^>]*?(/?)>",
    re.DOTALL,
)


def _local_name(tag: str) -> str:
    """Strip an ElementTree namespace or an XML prefix from a tag name."""
    if "}" in tag:
        tag = tag.rsplit("}", 1)[1]
    return tag.split(":")[-1]


def _project_version_span(text: str) -> Tuple[int, int]:
    """
    Locate the text content of the project-level <version> element.

    Returns:
        (start, end) offsets of the element content in ``text``

    Raises:
        ValueError: If there is no project-level <version>
    """
    depth = 0
    for match in _XML_TOKEN.finditer(text):
        closing, name, self_closing = match.groups()
        if name is None:
            continue
        if closing:
            depth -= 1
            continue
        if self_closing:
            continue
        if depth == 1 and _local_name(name) == "version":
            start = match.end()
            end = text.find(f"</{name}", start)
            if end == -1:
                raise ValueError("unterminated <version> element")
            return start, end
        depth += 1
    raise ValueError("no project-level <version> element")


class PomVersionStore:
    """Version store backed by a Maven pom.xml."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_text(self) -> str:
        if not self._path.exists():
            raise ParseError(str(self._path), "file does not exist")
        try:
            return self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise ParseError(str(self._path), str(e)) from e

    def read(self) -> Version:
        text = self._read_text()

        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise ParseError(str(self._path), f"malformed XML: {e}") from e

        if _local_name(root.tag) != "project":
            raise ParseError(str(self._path), "root element is not <project>")

        version_text = None
        for child in root:
            if isinstance(child.tag, str) and _local_name(child.tag) == "version":
                version_text = (child.text or "").strip()
                break

        if version_text is None:
            raise ParseError(
                str(self._path),
                "no project-level <version> (versions inherited from <parent> "
                "are not supported)",
            )

        try:
            return Version(version_text)
        except VersionFormatError as e:
            raise ParseError(str(self._path), str(e)) from e

    def write(self, version: Version) -> None:
        text = self._read_text()
        try:
            start, end = _project_version_span(text)
        except ValueError as e:
            raise ParseError(str(self._path), str(e)) from e

        content = text[start:end]
        current = content.strip()
        if current:
            replaced = content.replace(current, str(version), 1)
        else:
            replaced = str(version)

        self._path.write_text(text[:start] + replaced + text[end:], encoding="utf-8")

    def __repr__(self) -> str:
        return f"PomVersionStore('{self._path}')"


_YAML_VERSION_LINE = re.compile(
    r"^(?P<prefix>version:[ \t]*)(?P<quote>['\"]?)(?P<value>[^'\"\s#]+)(?P=quote)",
    re.MULTILINE,
)


class YamlVersionStore:
    """Version store backed by a YAML file with a top-level ``version`` key."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> Version:
        if not self._path.exists():
            raise ParseError(str(self._path), "file does not exist")

        try:
            with open(self._path, "r") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ParseError(str(self._path), f"malformed YAML: {e}") from e

        if not isinstance(data, dict) or "version" not in data:
            raise ParseError(str(self._path), "no top-level 'version' key")

        raw = data["version"]
        if not isinstance(raw, str):
            # e.g. `version: 1.0` is loaded as a float
            raise ParseError(
                str(self._path), f"version must be a string, got {raw!r}"
            )

        try:
            return Version(raw)
        except VersionFormatError as e:
            raise ParseError(str(self._path), str(e)) from e

    def write(self, version: Version) -> None:
        # Validates the descriptor before touching it.
        self.read()
        text = self._path.read_text(encoding="utf-8")

        def replace(m: re.Match) -> str:
            return f"{m.group('prefix')}{m.group('quote')}{version}{m.group('quote')}"

        updated, count = _YAML_VERSION_LINE.subn(replace, text, count=1)
        if count == 0:
            data = yaml.safe_load(text)
            data["version"] = str(version)
            updated = yaml.safe_dump(data, sort_keys=False)

        self._path.write_text(updated, encoding="utf-8")

    def __repr__(self) -> str:
        return f"YamlVersionStore('{self._path}')"


def open_version_store(path: Union[str, Path]) -> VersionStore:
    """
    Pick a version store implementation from the descriptor file name.

    ``*.xml`` (typically pom.xml) maps to PomVersionStore, ``*.yaml``/``*.yml``
    to YamlVersionStore.

    Raises:
        ParseError: If the file type is not supported
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".xml":
        return PomVersionStore(path)
    if suffix in (".yaml", ".yml"):
        return YamlVersionStore(path)
    raise ParseError(str(path), f"unsupported descriptor type '{suffix or path.name}'")
