"""
Base collaborators - abstract interfaces for the task host, shell and HTTP
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class BaseTaskRunner(ABC):
    """Host build-task runner that owns a running task"""

    @abstractmethod
    def report_fatal(self, error: Exception) -> None:
        """Fail the task

        Args:
            error: The error that stopped the pipeline
        """
        pass

    @abstractmethod
    def signal_completion(self) -> None:
        """Mark the task as finished successfully"""
        pass


class BaseCommandRunner(ABC):
    """Runs shell commands"""

    @abstractmethod
    async def run(self, command: str) -> str:
        """Run command through the shell and return its stdout

        Raises:
            CommandError: If the command can't be started, times out
                or exits with a non-zero status
        """
        pass


class BaseJSONPoster(ABC):
    """Sends JSON documents over HTTP"""

    @abstractmethod
    async def post_json(self, url: str, body: Dict[str, Any]) -> int:
        """POST body as JSON

        Returns:
            HTTP status code of the response

        Raises:
            DeploymentTransportError: If no response was received
        """
        pass
