"""Raygun Deployment Core"""

from .config import Config, Credentials, load_config, load_credentials
from .exceptions import (
    RaygunDeploymentError,
    ConfigError,
    MissingCredentialError,
    CommandError,
    EmptyOutputError,
    DeploymentError,
    DeploymentTransportError,
    UnauthorizedError,
    ForbiddenError,
    ApiError,
)
from .logging_config import setup_logging, JSONFormatter

__all__ = [
    "Config",
    "Credentials",
    "load_config",
    "load_credentials",
    "RaygunDeploymentError",
    "ConfigError",
    "MissingCredentialError",
    "CommandError",
    "EmptyOutputError",
    "DeploymentError",
    "DeploymentTransportError",
    "UnauthorizedError",
    "ForbiddenError",
    "ApiError",
    "setup_logging",
    "JSONFormatter",
]
