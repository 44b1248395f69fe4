import io
import logging
import subprocess
from pathlib import Path

import pytest
from returns.result import Failure, Success

from promoter.collaborators.interfaces import Author


@pytest.fixture
def capture_logs():
    """Fixture to capture log output during tests."""
    log_stream = io.StringIO()
    handler = logging.StreamHandler(log_stream)
    logger = logging.getLogger("promoter")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    yield log_stream  # Yield the stream to the test function

    # Cleanup after the test
    logger.removeHandler(handler)
    log_stream.close()


POM_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
    <modelVersion>4.0.0</modelVersion>
    <parent>
        <groupId>org.springframework.boot</groupId>
        <artifactId>spring-boot-starter-parent</artifactId>
        <version>2.7.18</version>
    </parent>
    <groupId>com.example</groupId>
    <artifactId>hello-service</artifactId>
    <!-- project version -->
    <version>{version}</version>
    <dependencies>
        <dependency>
            <groupId>junit</groupId>
            <artifactId>junit</artifactId>
            <version>4.13.2</version>
        </dependency>
    </dependencies>
</project>
"""


@pytest.fixture
def pom_file(tmp_path) -> Path:
    """A pom.xml at version 1.0.0."""
    path = tmp_path / "pom.xml"
    path.write_text(POM_TEMPLATE.format(version="1.0.0"))
    return path


@pytest.fixture
def lock_dir(tmp_path) -> Path:
    return tmp_path / "locks"


# Fake collaborators


class FakeBuilder:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def build(self, version):
        self.calls.append(version)
        if self.error is not None:
            return Failure(self.error)
        return Success(Path(f"target/app-{version}.jar"))


class FakePublisher:
    def __init__(self, build_error=None, push_error=None):
        self.built = []
        self.pushed = []
        self.build_error = build_error
        self.push_error = push_error

    def build_image(self, artifact, tag):
        self.built.append((artifact, tag))
        if self.build_error is not None:
            return Failure(self.build_error)
        return Success(f"registry.example.com/app:{tag}")

    def push(self, image_ref, credentials):
        self.pushed.append((image_ref, credentials))
        if self.push_error is not None:
            return Failure(self.push_error)
        return Success(image_ref)


class FakeDeployer:
    def __init__(self, error=None):
        self.applied = []
        self.error = error

    def apply(self, template, variables):
        self.applied.append((template, dict(variables)))
        if self.error is not None:
            return Failure(self.error)
        return Success(f"{template.stem} configured")


class FakeCommitter:
    def __init__(self, error=None):
        self.commits = []
        self.error = error

    def commit(self, message, author):
        self.commits.append((message, author))
        if self.error is not None:
            return Failure(self.error)
        return Success("0123456789abcdef")


@pytest.fixture
def fakes():
    """A fresh set of fake collaborators, keyed by role."""
    return {
        "builder": FakeBuilder(),
        "publisher": FakePublisher(),
        "deployer": FakeDeployer(),
        "committer": FakeCommitter(),
    }


@pytest.fixture
def author() -> Author:
    return Author("jenkins", "jenkins@example.com")


class RecordingRunner:
    """Stand-in for CommandRunner returning queued results."""

    def __init__(self, *results, dry_run=False):
        self.results = list(results)
        self.calls = []
        self.dry_run = dry_run

    def run(self, args, input=None, env=None, secrets=()):
        self.calls.append(
            {"args": list(args), "input": input, "env": env, "secrets": secrets}
        )
        if self.results:
            returncode, stdout, stderr = self.results.pop(0)
        else:
            returncode, stdout, stderr = 0, "", ""
        return subprocess.CompletedProcess(list(args), returncode, stdout, stderr)


@pytest.fixture
def make_runner():
    """Factory for RecordingRunner; each result is (returncode, stdout, stderr)."""
    return RecordingRunner


@pytest.fixture
def pom_template() -> str:
    """pom.xml text with a ``{version}`` placeholder for the project version."""
    return POM_TEMPLATE
