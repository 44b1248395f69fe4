"""Tests for MavenArtifactBuilder."""

import os

import pytest
from returns.result import Success

from promoter.collaborators import BuildError, MavenArtifactBuilder
from promoter.versioning import Version


def touch(path, mtime):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"PK")
    os.utime(path, (mtime, mtime))
    return path


@pytest.mark.short
class TestMavenArtifactBuilder:
    def test_build_runs_goals(self, tmp_path, make_runner):
        jar = touch(tmp_path / "target" / "app-1.0.1.jar", 100)
        runner = make_runner()
        builder = MavenArtifactBuilder(tmp_path, runner=runner)

        result = builder.build(Version("1.0.1"))

        assert result == Success(jar)
        assert runner.calls[0]["args"] == ["mvn", "-B", "clean", "package"]

    def test_custom_goals(self, tmp_path, make_runner):
        touch(tmp_path / "target" / "app.jar", 100)
        runner = make_runner()
        builder = MavenArtifactBuilder(
            tmp_path, runner=runner, goals=["verify"], executable="./mvnw"
        )

        builder.build(Version("1.0.1"))

        assert runner.calls[0]["args"] == ["./mvnw", "-B", "verify"]

    def test_prefers_jar_named_after_version(self, tmp_path, make_runner):
        versioned = touch(tmp_path / "target" / "app-1.0.1.jar", 100)
        touch(tmp_path / "target" / "app-1.0.0.jar", 200)
        touch(tmp_path / "target" / "original-app-1.0.1.jar", 300)

        result = MavenArtifactBuilder(tmp_path, runner=make_runner()).build(
            Version("1.0.1")
        )

        assert result.unwrap() == versioned

    def test_build_failure(self, tmp_path, make_runner):
        runner = make_runner((1, "[ERROR] COMPILATION ERROR", ""))

        result = MavenArtifactBuilder(tmp_path, runner=runner).build(Version("1.0.1"))

        error = result.failure()
        assert isinstance(error, BuildError)
        assert "COMPILATION ERROR" in error.stderr

    def test_no_jar_produced(self, tmp_path, make_runner):
        result = MavenArtifactBuilder(tmp_path, runner=make_runner()).build(
            Version("1.0.1")
        )

        assert isinstance(result.failure(), BuildError)
        assert "no jar was found" in str(result.failure())

    def test_dry_run_without_jar(self, tmp_path, make_runner):
        runner = make_runner(dry_run=True)

        result = MavenArtifactBuilder(tmp_path, runner=runner).build(Version("1.0.1"))

        assert result == Success(tmp_path / "target")
