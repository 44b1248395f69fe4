"""Pydantic models for promoter pipeline definitions."""

from promoter.model.pipeline import (
    CredentialsRef,
    ArtifactSettings,
    ImageSettings,
    DeploySettings,
    CommitSettings,
    PipelineDefinition,
)
from promoter.model.validation import PipelineDefinitionError

__all__ = [
    "CredentialsRef",
    "ArtifactSettings",
    "ImageSettings",
    "DeploySettings",
    "CommitSettings",
    "PipelineDefinition",
    "PipelineDefinitionError",
]
