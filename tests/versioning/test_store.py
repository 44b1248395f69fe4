"""Tests for the pom.xml and YAML version stores."""

import pytest

from promoter.versioning import (
    ParseError,
    PomVersionStore,
    Version,
    YamlVersionStore,
    open_version_store,
)


@pytest.mark.short
class TestPomVersionStore:
    def test_read_project_version(self, pom_file):
        assert PomVersionStore(pom_file).read() == Version("1.0.0")

    def test_write_only_touches_project_version(self, pom_file, pom_template):
        store = PomVersionStore(pom_file)
        store.write(Version("1.0.1"))

        assert pom_file.read_text() == pom_template.format(version="1.0.1")
        # parent and dependency versions are untouched
        assert "<version>2.7.18</version>" in pom_file.read_text()
        assert "<version>4.13.2</version>" in pom_file.read_text()
        assert store.read() == Version("1.0.1")

    def test_pom_without_namespace(self, tmp_path):
        pom = tmp_path / "pom.xml"
        pom.write_text(
            "<project><artifactId>a</artifactId><version> 0.1.9 </version></project>"
        )
        store = PomVersionStore(pom)
        assert store.read() == Version("0.1.9")

        store.write(Version("0.1.10"))
        assert "<version> 0.1.10 </version>" in pom.read_text()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ParseError, match="does not exist"):
            PomVersionStore(tmp_path / "pom.xml").read()

    def test_malformed_xml(self, tmp_path):
        pom = tmp_path / "pom.xml"
        pom.write_text("<project><version>1.0.0</version>")
        with pytest.raises(ParseError, match="malformed XML"):
            PomVersionStore(pom).read()

    def test_wrong_root_element(self, tmp_path):
        pom = tmp_path / "pom.xml"
        pom.write_text("<settings><version>1.0.0</version></settings>")
        with pytest.raises(ParseError, match="not <project>"):
            PomVersionStore(pom).read()

    def test_inherited_version_is_not_supported(self, tmp_path):
        pom = tmp_path / "pom.xml"
        pom.write_text(
            "<project><parent><version>1.0.0</version></parent>"
            "<artifactId>a</artifactId></project>"
        )
        with pytest.raises(ParseError, match="inherited from <parent>"):
            PomVersionStore(pom).read()

    def test_snapshot_version_is_rejected(self, pom_file, pom_template):
        pom_file.write_text(pom_template.format(version="1.0.0-SNAPSHOT"))
        with pytest.raises(ParseError, match="Invalid version format"):
            PomVersionStore(pom_file).read()


@pytest.mark.short
class TestYamlVersionStore:
    def test_read_and_write(self, tmp_path):
        path = tmp_path / "version.yaml"
        path.write_text("# release\nname: app\nversion: 1.2.3\nother: value\n")
        store = YamlVersionStore(path)

        assert store.read() == Version("1.2.3")
        store.write(Version("1.2.4"))
        expected = "# release\nname: app\nversion: 1.2.4\nother: value\n"
        assert path.read_text() == expected

    def test_quotes_are_preserved(self, tmp_path):
        path = tmp_path / "version.yml"
        path.write_text('version: "2.0.0"\n')
        store = YamlVersionStore(path)

        store.write(Version("2.0.1"))
        assert path.read_text() == 'version: "2.0.1"\n'

    def test_float_version(self, tmp_path):
        path = tmp_path / "version.yaml"
        path.write_text("version: 1.0\n")
        with pytest.raises(ParseError, match="must be a string"):
            YamlVersionStore(path).read()

    def test_missing_key(self, tmp_path):
        path = tmp_path / "version.yaml"
        path.write_text("name: app\n")
        with pytest.raises(ParseError, match="no top-level 'version' key"):
            YamlVersionStore(path).read()

    def test_invalid_file_is_not_written(self, tmp_path):
        path = tmp_path / "version.yaml"
        path.write_text("version: latest\n")
        with pytest.raises(ParseError):
            YamlVersionStore(path).write(Version("1.0.0"))
        assert path.read_text() == "version: latest\n"


@pytest.mark.short
class TestOpenVersionStore:
    def test_store_type_from_suffix(self, tmp_path):
        assert isinstance(open_version_store(tmp_path / "pom.xml"), PomVersionStore)
        assert isinstance(open_version_store(tmp_path / "v.yaml"), YamlVersionStore)
        assert isinstance(open_version_store(tmp_path / "v.yml"), YamlVersionStore)

    def test_unsupported_type(self, tmp_path):
        with pytest.raises(ParseError, match="unsupported descriptor type"):
            open_version_store(tmp_path / "build.gradle")
