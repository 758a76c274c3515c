"""
Shared test doubles for the task host, shell and HTTP collaborators
"""

from typing import Any, Dict, List, Optional, Tuple, Union

import pytest

from core.config import Config
from integrations.base import BaseCommandRunner, BaseJSONPoster, BaseTaskRunner


class FakeCommandRunner(BaseCommandRunner):
    """Returns canned outputs in order, raising any that are exceptions"""

    def __init__(self, outputs: List[Union[str, Exception]]):
        self.outputs = list(outputs)
        self.commands: List[str] = []

    async def run(self, command: str) -> str:
        self.commands.append(command)
        output = self.outputs.pop(0)
        if isinstance(output, Exception):
            raise output
        return output


class FakePoster(BaseJSONPoster):
    """Records requests and answers with a fixed status code"""

    def __init__(self, status_code: int = 200, error: Optional[Exception] = None):
        self.status_code = status_code
        self.error = error
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    async def post_json(self, url: str, body: Dict[str, Any]) -> int:
        self.calls.append((url, body))
        if self.error is not None:
            raise self.error
        return self.status_code


class RecordingTaskRunner(BaseTaskRunner):
    """Task host that remembers how the task ended"""

    def __init__(self):
        self.fatal_errors: List[Exception] = []
        self.completions = 0

    def report_fatal(self, error: Exception) -> None:
        self.fatal_errors.append(error)

    def signal_completion(self) -> None:
        self.completions += 1


@pytest.fixture
def config():
    """Config with both credentials set and no .env lookup"""
    return Config(_env_file=None, raygun_deploy_token="user", raygun_deploy_key="app")


@pytest.fixture
def task():
    return RecordingTaskRunner()


@pytest.fixture
def make_runner():
    return FakeCommandRunner


@pytest.fixture
def make_poster():
    return FakePoster
