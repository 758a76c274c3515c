"""
Integrations module - task host, shell and Raygun API
"""

from .base import BaseTaskRunner, BaseCommandRunner, BaseJSONPoster
from .shell import ShellCommandRunner
from .http import HttpxJSONPoster
from .raygun import (
    RaygunDeploymentReporter,
    DeploymentOutcome,
    DeploymentRecord,
    DeploymentResult,
    interpret_status,
)

__all__ = [
    "BaseTaskRunner",
    "BaseCommandRunner",
    "BaseJSONPoster",
    "ShellCommandRunner",
    "HttpxJSONPoster",
    "RaygunDeploymentReporter",
    "DeploymentOutcome",
    "DeploymentRecord",
    "DeploymentResult",
    "interpret_status",
]
