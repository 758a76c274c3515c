"""
Custom exceptions for Raygun deployment reporting
"""

from typing import Optional


class RaygunDeploymentError(Exception):
    """Base exception for all deployment reporting errors"""
    pass


# Config exceptions
class ConfigError(RaygunDeploymentError):
    """Configuration error"""
    pass


class MissingCredentialError(ConfigError):
    """Required credential environment variable is missing"""
    def __init__(self, variable: str):
        super().__init__(f"Required environment variable {variable} is missing")
        self.variable = variable


# Command exceptions
class CommandError(RaygunDeploymentError):
    """Shell command failed to run or exited with an error"""
    def __init__(
        self,
        message: str,
        command: str = "",
        returncode: Optional[int] = None,
        stderr: str = ""
    ):
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class EmptyOutputError(CommandError):
    """Command succeeded but printed nothing"""
    def __init__(self, command: str):
        super().__init__(f"No output from command: {command}", command=command, returncode=0)


# Raygun API exceptions
class DeploymentError(RaygunDeploymentError):
    """Base exception for sending deployment info"""
    pass


class DeploymentTransportError(DeploymentError):
    """Network failure while talking to Raygun"""
    pass


class UnauthorizedError(DeploymentError):
    """Raygun rejected the auth token (401)"""
    pass


class ForbiddenError(DeploymentError):
    """Raygun rejected the application key (403)"""
    pass


class ApiError(DeploymentError):
    """Unexpected response code from Raygun"""
    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code
