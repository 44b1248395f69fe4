"""Pydantic model of a promotion pipeline definition (``promote.yaml``)."""

import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, Field, PrivateAttr, field_validator
from pydantic import ValidationError as PydanticValidationError

from promoter.collaborators.exceptions import AuthError
from promoter.collaborators.interfaces import Author, Credentials
from promoter.constants import (
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_MANIFESTS,
    DEFAULT_TARGET_BRANCH,
    DEFAULT_VERSION_FILE,
)

from .validation import PipelineDefinitionError


def validate_non_empty_string(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("must be a non-empty string")
    return v.strip()


class CredentialsRef(BaseModel):
    """
    Names of the environment variables holding a username/password pair.

    The orchestrator injects the secrets (Jenkins ``withCredentials``); the
    definition never contains them.
    """

    username_env: str = Field(..., description="Variable holding the username")
    password_env: str = Field(..., description="Variable holding the password")

    @field_validator("username_env", "password_env")
    @classmethod
    def validate_env_name(cls, v: str) -> str:
        return validate_non_empty_string(v)

    def resolve(self, environ: Mapping[str, str]) -> Credentials:
        """
        Read the credential from ``environ``.

        Raises:
            AuthError: If either variable is unset or empty
        """
        missing = [
            name
            for name in (self.username_env, self.password_env)
            if not environ.get(name)
        ]
        if missing:
            raise AuthError(f"Credential variables not set: {', '.join(missing)}")
        return Credentials(environ[self.username_env], environ[self.password_env])


class ArtifactSettings(BaseModel):
    """How the application artifact is built."""

    goals: List[str] = Field(["clean", "package"], description="Maven goals")
    executable: str = Field("mvn", description="Maven binary")

    @field_validator("goals")
    @classmethod
    def validate_goals(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("at least one Maven goal is required")
        return v


class ImageSettings(BaseModel):
    """Container image build and push settings."""

    repository: str = Field(..., description="Image repository, without tag")
    context: str = Field(".", description="Docker build context")
    executable: str = Field("docker", description="docker binary")
    credentials: Optional[CredentialsRef] = Field(
        None, description="Registry credential"
    )

    @field_validator("repository")
    @classmethod
    def validate_repository(cls, v: str) -> str:
        v = validate_non_empty_string(v)
        last = v.rsplit("/", 1)[-1]
        if ":" in last or "@" in last:
            raise ValueError("repository must not include a tag or digest")
        return v


class DeploySettings(BaseModel):
    """Cluster deploy settings."""

    manifests: List[str] = Field(
        default_factory=lambda: list(DEFAULT_MANIFESTS),
        description="Manifest templates, applied in order",
    )
    executable: str = Field("kubectl", description="kubectl binary")
    kubeconfig: Optional[str] = Field(None, description="Path to a kubeconfig")

    @field_validator("manifests")
    @classmethod
    def validate_manifests(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("at least one manifest template is required")
        return v


class CommitSettings(BaseModel):
    """Version-commit settings."""

    message: str = Field(DEFAULT_COMMIT_MESSAGE, description="Commit message")
    author_name: str = Field("jenkins", description="Commit author name")
    author_email: str = Field("jenkins@example.com", description="Commit author email")
    remote: str = Field("origin", description="Remote to push to")
    push_ref: Optional[str] = Field(
        None, description="Remote branch to push to (defaults to target_branch)"
    )
    credentials: Optional[CredentialsRef] = Field(
        None, description="Scoped push credential"
    )

    @field_validator("message", "author_name", "author_email", "remote")
    @classmethod
    def validate_strings(cls, v: str) -> str:
        return validate_non_empty_string(v)

    @property
    def author(self) -> Author:
        return Author(self.author_name, self.author_email)


class PipelineDefinition(BaseModel):
    """Main pipeline definition."""

    app_name: str = Field(..., description="Application name, used as APP_NAME")
    target_branch: str = Field(
        DEFAULT_TARGET_BRANCH, description="Only branch allowed to promote"
    )
    version_file: str = Field(
        DEFAULT_VERSION_FILE, description="Descriptor holding the version"
    )
    artifact: ArtifactSettings = Field(default_factory=ArtifactSettings)
    image: ImageSettings
    deploy: DeploySettings = Field(default_factory=DeploySettings)
    commit: CommitSettings = Field(default_factory=CommitSettings)

    _base_dir: Path = PrivateAttr(default_factory=Path.cwd)

    @field_validator("app_name", "target_branch", "version_file")
    @classmethod
    def validate_strings(cls, v: str) -> str:
        return validate_non_empty_string(v)

    @property
    def base_dir(self) -> Path:
        """Directory relative paths in the definition are resolved against."""
        return self._base_dir

    def resolve_path(self, value: Union[str, Path]) -> Path:
        path = Path(os.path.expanduser(str(value)))
        if path.is_absolute():
            return path
        return self._base_dir / path

    @property
    def version_path(self) -> Path:
        return self.resolve_path(self.version_file)

    @property
    def manifest_paths(self) -> List[Path]:
        return [self.resolve_path(m) for m in self.deploy.manifests]

    @property
    def push_ref(self) -> str:
        return self.commit.push_ref or self.target_branch

    @classmethod
    def from_dict(
        cls, data: Dict, base_dir: Optional[Union[str, Path]] = None
    ) -> "PipelineDefinition":
        try:
            definition = cls(**data)
        except PydanticValidationError as e:
            raise PipelineDefinitionError.from_pydantic(e) from e
        if base_dir is not None:
            definition._base_dir = Path(base_dir)
        return definition

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "PipelineDefinition":
        """
        Load a definition from a YAML file.

        Relative paths inside the file resolve against the file's directory.

        Raises:
            PipelineDefinitionError: If the file is missing, not YAML or invalid
        """
        path = Path(path)
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise PipelineDefinitionError(f"Cannot read file: {e}", path=path) from e
        except yaml.YAMLError as e:
            raise PipelineDefinitionError(f"Malformed YAML: {e}", path=path) from e

        if not isinstance(data, dict):
            raise PipelineDefinitionError("Expected a YAML mapping", path=path)

        try:
            definition = cls(**data)
        except PydanticValidationError as e:
            raise PipelineDefinitionError.from_pydantic(e, path=path) from e

        definition._base_dir = path.resolve().parent
        return definition
