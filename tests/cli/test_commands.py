"""Tests for the `version`, `tag` and `gate` commands."""

import pytest
from click.testing import CliRunner

from promoter.cli.main import cli


def invoke(*args, env=None):
    return CliRunner().invoke(cli, list(args), env=env or {})


@pytest.mark.short
class TestVersionCommand:
    def test_show(self, pom_file):
        result = invoke("version", "show", "--file", str(pom_file))

        assert result.exit_code == 0
        assert result.output.strip().endswith("1.0.0")

    def test_bump(self, pom_file):
        result = invoke("version", "bump", "--file", str(pom_file))

        assert result.exit_code == 0
        assert "1.0.1" in result.output
        assert "<version>1.0.1</version>" in pom_file.read_text()

    def test_missing_descriptor(self, tmp_path):
        result = invoke("version", "show", "--file", str(tmp_path / "pom.xml"))
        assert result.exit_code == 1


@pytest.mark.short
class TestTagCommand:
    def test_current_version(self, pom_file):
        result = invoke("tag", "--run-counter", "42", "--file", str(pom_file))

        assert result.exit_code == 0
        assert result.output.strip().endswith("1.0.0-42")

    def test_next_version(self, pom_file):
        before = pom_file.read_text()

        result = invoke("tag", "--run-counter", "42", "--file", str(pom_file), "--next")

        assert result.output.strip().endswith("1.0.1-42")
        assert pom_file.read_text() == before

    def test_run_counter_from_environment(self, pom_file):
        result = invoke("tag", "--file", str(pom_file), env={"BUILD_NUMBER": "9"})
        assert result.output.strip().endswith("1.0.0-9")

    def test_invalid_run_counter(self, pom_file):
        result = invoke("tag", "--run-counter", "0", "--file", str(pom_file))
        assert result.exit_code == 1


@pytest.mark.short
class TestGateCommand:
    def test_target_branch(self):
        assert invoke("gate", "--branch", "master").exit_code == 0

    def test_feature_branch(self):
        assert invoke("gate", "--branch", "feature/login").exit_code == 1

    def test_case_sensitive(self):
        assert invoke("gate", "--branch", "Master").exit_code == 1

    def test_custom_target(self):
        assert invoke("gate", "--branch", "main", "--target", "main").exit_code == 0

    def test_branch_from_environment(self):
        env = {"BRANCH_NAME": None, "GIT_BRANCH": "origin/master"}
        result = invoke("gate", env=env)
        assert result.exit_code == 0

    def test_remote_prefixed_branch_option_does_not_pass(self):
        assert invoke("gate", "--branch", "origin/master").exit_code == 1

    def test_remote_prefixed_branch_name_does_not_pass(self):
        env = {"BRANCH_NAME": "origin/master", "GIT_BRANCH": None}
        assert invoke("gate", env=env).exit_code == 1
