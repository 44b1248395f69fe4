"""Tests for the pipeline definition model."""

from pathlib import Path

import pytest

from promoter.collaborators import AuthError, Author, Credentials
from promoter.model import CredentialsRef, PipelineDefinition, PipelineDefinitionError

MINIMAL = {
    "app_name": "hello-service",
    "image": {"repository": "registry.example.com/team/hello-service"},
}


@pytest.mark.short
class TestPipelineDefinition:
    def test_defaults(self):
        definition = PipelineDefinition.from_dict(MINIMAL, base_dir="/work")

        assert definition.target_branch == "master"
        assert definition.version_path == Path("/work/pom.xml")
        assert definition.manifest_paths == [
            Path("/work/kubernetes/deployment.yaml"),
            Path("/work/kubernetes/service.yaml"),
        ]
        assert definition.artifact.goals == ["clean", "package"]
        assert definition.commit.message == "ci: version bump"
        assert definition.commit.author == Author("jenkins", "jenkins@example.com")
        assert definition.push_ref == "master"

    def test_push_ref_override(self):
        data = dict(MINIMAL, commit={"push_ref": "release"})
        assert PipelineDefinition.from_dict(data).push_ref == "release"

    def test_absolute_paths_are_kept(self):
        data = dict(MINIMAL, version_file="/srv/app/pom.xml")
        definition = PipelineDefinition.from_dict(data, base_dir="/work")
        assert definition.version_path == Path("/srv/app/pom.xml")

    def test_missing_required_fields(self):
        with pytest.raises(PipelineDefinitionError) as exc_info:
            PipelineDefinition.from_dict({"target_branch": "main"})

        message = str(exc_info.value)
        assert "app_name" in message
        assert "image" in message

    @pytest.mark.parametrize(
        "repository",
        ["registry.example.com/app:latest", "app@sha256:abc", "  "],
    )
    def test_invalid_repository(self, repository):
        data = dict(MINIMAL, image={"repository": repository})
        with pytest.raises(PipelineDefinitionError, match="image.repository"):
            PipelineDefinition.from_dict(data)

    def test_registry_port_is_not_a_tag(self):
        data = dict(MINIMAL, image={"repository": "localhost:5000/app"})
        definition = PipelineDefinition.from_dict(data)
        assert definition.image.repository == "localhost:5000/app"

    def test_empty_manifest_list(self):
        data = dict(MINIMAL, deploy={"manifests": []})
        with pytest.raises(PipelineDefinitionError, match="deploy.manifests"):
            PipelineDefinition.from_dict(data)


@pytest.mark.short
class TestFromYaml:
    def test_paths_resolve_against_file(self, tmp_path):
        path = tmp_path / "ci" / "promote.yaml"
        path.parent.mkdir()
        path.write_text(
            "app_name: hello\n"
            "version_file: ../pom.xml\n"
            "image:\n"
            "  repository: registry.example.com/hello\n"
        )

        definition = PipelineDefinition.from_yaml(path)

        assert definition.base_dir == path.parent.resolve()
        assert definition.version_path.resolve() == (tmp_path / "pom.xml").resolve()

    def test_missing_file(self, tmp_path):
        with pytest.raises(PipelineDefinitionError, match="Cannot read file"):
            PipelineDefinition.from_yaml(tmp_path / "promote.yaml")

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "promote.yaml"
        path.write_text("app_name: [unclosed\n")
        with pytest.raises(PipelineDefinitionError, match="Malformed YAML"):
            PipelineDefinition.from_yaml(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "promote.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(PipelineDefinitionError, match="Expected a YAML mapping"):
            PipelineDefinition.from_yaml(path)

    def test_sample_definition(self):
        path = Path(__file__).parents[2] / "examples" / "promote.yaml"
        definition = PipelineDefinition.from_yaml(path)

        assert definition.app_name == "hello-service"
        assert definition.image.credentials.username_env == "REGISTRY_USER"
        assert all(p.exists() for p in definition.manifest_paths)
        assert definition.version_path.exists()


@pytest.mark.short
class TestCredentialsRef:
    def test_resolve(self):
        ref = CredentialsRef(username_env="U", password_env="P")
        assert ref.resolve({"U": "ci", "P": "pw"}) == Credentials("ci", "pw")

    def test_missing_variables(self):
        ref = CredentialsRef(username_env="U", password_env="P")
        with pytest.raises(AuthError, match="not set: P"):
            ref.resolve({"U": "ci"})
