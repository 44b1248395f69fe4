from enum import Enum


class Stage(str, Enum):
    """Stages of a promotion run, in execution order."""

    VERSION = "version"
    ARTIFACT = "artifact"
    IMAGE = "image"
    DEPLOY = "deploy"
    COMMIT = "commit"


# Stages that change state outside the pipeline; guarded by the branch gate.
GATED_STAGES = (Stage.IMAGE, Stage.DEPLOY, Stage.COMMIT)

DEFAULT_TARGET_BRANCH = "master"
DEFAULT_VERSION_FILE = "pom.xml"
DEFAULT_DEFINITION_FILE = "promote.yaml"
DEFAULT_MANIFESTS = ("kubernetes/deployment.yaml", "kubernetes/service.yaml")
DEFAULT_COMMIT_MESSAGE = "ci: version bump"

# Variables substituted into manifest templates
APP_NAME_VAR = "APP_NAME"
IMAGE_NAME_VAR = "IMAGE_NAME"

# Orchestrator environment (Jenkins)
RUN_COUNTER_ENV = "BUILD_NUMBER"
REMOTE_BRANCH_ENV = "GIT_BRANCH"
BRANCH_ENV_VARS = ("BRANCH_NAME", REMOTE_BRANCH_ENV)
