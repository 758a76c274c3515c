"""
Raygun Deployment Reporter - send deployment info to Raygun.io

POST https://app.raygun.io/deployments?authToken=<token>
Body: {"apiKey": ..., "version": ..., "scmIdentifier": ...}

Only the response status code is inspected.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

import httpx

from core.config import Credentials
from core.exceptions import ApiError, ForbiddenError, UnauthorizedError
from .base import BaseJSONPoster


logger = logging.getLogger(__name__)


RAYGUN_API_HOST = "app.raygun.io"
RAYGUN_API_PORT = 443
DEPLOYMENTS_PATH = "/deployments"

ERROR_PREFIX = "Could not send deployment info to Raygun"


class DeploymentOutcome(str, Enum):
    SUCCESS = "success"
    FORBIDDEN = "forbidden"
    UNAUTHORIZED = "unauthorized"
    OTHER_ERROR = "other_error"


def interpret_status(status_code: int) -> DeploymentOutcome:
    """Map Raygun response code to outcome"""
    if status_code == 200:
        return DeploymentOutcome.SUCCESS
    if status_code == 403:
        return DeploymentOutcome.FORBIDDEN
    if status_code == 401:
        return DeploymentOutcome.UNAUTHORIZED
    return DeploymentOutcome.OTHER_ERROR


@dataclass(frozen=True)
class DeploymentRecord:
    """Version and revision being deployed"""
    version: str
    scm_identifier: str

    def to_payload(self, api_key: str) -> Dict[str, Any]:
        return {
            "apiKey": api_key,
            "version": self.version,
            "scmIdentifier": self.scm_identifier,
        }


@dataclass(frozen=True)
class DeploymentResult:
    """Результат запроса к Raygun"""
    outcome: DeploymentOutcome
    status_code: int

    @property
    def success(self) -> bool:
        return self.outcome == DeploymentOutcome.SUCCESS

    def raise_for_outcome(self) -> None:
        """Raise the matching error unless Raygun accepted the deployment

        Raises:
            ForbiddenError: 403, wrong application key
            UnauthorizedError: 401, wrong auth token
            ApiError: any other non-200 code
        """
        if self.outcome == DeploymentOutcome.SUCCESS:
            return
        if self.outcome == DeploymentOutcome.FORBIDDEN:
            raise ForbiddenError(
                f"{ERROR_PREFIX}: your raygunApiKey is either wrong "
                f"or you don't have access to that application"
            )
        if self.outcome == DeploymentOutcome.UNAUTHORIZED:
            raise UnauthorizedError(f"{ERROR_PREFIX}: your raygunAuthToken is wrong")
        raise ApiError(
            f"{ERROR_PREFIX}: got a {self.status_code} response code",
            status_code=self.status_code
        )


class RaygunDeploymentReporter:
    """Отправляет информацию о деплое в Raygun"""

    def __init__(
        self,
        poster: BaseJSONPoster,
        credentials: Credentials,
        host: str = RAYGUN_API_HOST,
        port: int = RAYGUN_API_PORT
    ):
        self.poster = poster
        self.credentials = credentials
        self.host = host
        self.port = port

    @property
    def url(self) -> str:
        """Deployments endpoint with the auth token in the query string"""
        url = httpx.URL(
            scheme="https",
            host=self.host,
            port=self.port,
            path=DEPLOYMENTS_PATH,
            params={"authToken": self.credentials.deploy_token}
        )
        return str(url)

    def build_payload(self, record: DeploymentRecord) -> Dict[str, Any]:
        return record.to_payload(self.credentials.deploy_key)

    async def report(self, version: str, revision: str) -> DeploymentResult:
        """Отправить деплой и интерпретировать ответ

        Raises:
            DeploymentTransportError: On network failure (not retried)
        """
        record = DeploymentRecord(version=version, scm_identifier=revision)
        started = time.monotonic()
        status_code = await self.poster.post_json(self.url, self.build_payload(record))
        duration_ms = int((time.monotonic() - started) * 1000)

        outcome = interpret_status(status_code)
        logger.info(
            f"Raygun answered {status_code} ({outcome.value}) for {version}",
            extra={
                "version": version,
                "revision": revision,
                "status_code": status_code,
                "duration_ms": duration_ms,
            }
        )
        return DeploymentResult(outcome=outcome, status_code=status_code)
