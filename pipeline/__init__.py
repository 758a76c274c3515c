"""Pipeline module"""

from .orchestrator import DeploymentPipeline, PipelineState, PipelineStatus, PipelineStage
from .git_manager import GitRevisionResolver, TAG_COMMAND, REVISION_COMMAND

__all__ = [
    "DeploymentPipeline",
    "PipelineState",
    "PipelineStatus",
    "PipelineStage",
    "GitRevisionResolver",
    "TAG_COMMAND",
    "REVISION_COMMAND",
]
