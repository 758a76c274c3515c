"""
Pipeline Orchestrator - отправка деплоя в Raygun

Шаги (строго по порядку, без повторов):
- Проверка RAYGUN_DEPLOY_TOKEN / RAYGUN_DEPLOY_KEY
- Последний git тег
- Ревизия этого тега
- POST в Raygun и разбор кода ответа

Любая ошибка сразу уходит в report_fatal задачи, дальше ничего не выполняется.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from core.config import Config, load_credentials
from core.exceptions import RaygunDeploymentError
from integrations.base import BaseCommandRunner, BaseJSONPoster, BaseTaskRunner
from integrations.raygun import (
    DeploymentOutcome,
    DeploymentRecord,
    DeploymentResult,
    RaygunDeploymentReporter,
)
from .git_manager import GitRevisionResolver


logger = logging.getLogger(__name__)


class PipelineStatus(str, Enum):
    """Статус pipeline"""
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class PipelineStage(str, Enum):
    """Последний пройденный шаг"""
    START = "START"
    CREDENTIALS_CHECKED = "CREDENTIALS_CHECKED"
    VERSION_RESOLVED = "VERSION_RESOLVED"
    REVISION_RESOLVED = "REVISION_RESOLVED"
    REQUEST_SENT = "REQUEST_SENT"


@dataclass
class PipelineState:
    """Состояние одного запуска"""
    status: PipelineStatus = PipelineStatus.IDLE
    stage: PipelineStage = PipelineStage.START
    version: Optional[str] = None
    revision: Optional[str] = None
    payload: Optional[Dict[str, Any]] = None
    result: Optional[DeploymentResult] = None
    error: Optional[RaygunDeploymentError] = None

    @property
    def outcome(self) -> Optional[DeploymentOutcome]:
        return self.result.outcome if self.result else None


class DeploymentPipeline:
    """Линейный pipeline: credentials -> tag -> revision -> Raygun"""

    def __init__(
        self,
        config: Config,
        runner: BaseCommandRunner,
        poster: BaseJSONPoster,
        dry_run: bool = False
    ):
        self.config = config
        self.resolver = GitRevisionResolver(runner)
        self.poster = poster
        self.dry_run = dry_run
        self.state = PipelineState()

    async def run(self, task: BaseTaskRunner) -> PipelineState:
        """Запустить pipeline

        Completion or failure is signalled through task; the returned state
        describes how far the run got.
        """
        self.state = PipelineState(status=PipelineStatus.RUNNING)

        try:
            await self._execute()
        except RaygunDeploymentError as e:
            self.state.status = PipelineStatus.FAILED
            self.state.error = e
            logger.error(f"Deployment failed at {self.state.stage.value}: {e}")
            task.report_fatal(e)
            return self.state

        self.state.status = PipelineStatus.COMPLETED
        task.signal_completion()
        return self.state

    async def _execute(self) -> None:
        state = self.state

        credentials = load_credentials(self.config)
        state.stage = PipelineStage.CREDENTIALS_CHECKED

        state.version = await self.resolver.resolve_version()
        state.stage = PipelineStage.VERSION_RESOLVED

        state.revision = await self.resolver.resolve_revision(state.version)
        state.stage = PipelineStage.REVISION_RESOLVED

        reporter = RaygunDeploymentReporter(
            self.poster,
            credentials,
            host=self.config.raygun_api_host,
            port=self.config.raygun_api_port
        )
        state.payload = reporter.build_payload(
            DeploymentRecord(version=state.version, scm_identifier=state.revision)
        )

        if self.dry_run:
            logger.info(f"[DRY RUN] Would send {state.version} ({state.revision}) to Raygun.io")
            return

        state.result = await reporter.report(state.version, state.revision)
        state.stage = PipelineStage.REQUEST_SENT
        state.result.raise_for_outcome()

        logger.info(
            "Sent deployment info to Raygun.io",
            extra={"version": state.version, "revision": state.revision}
        )
