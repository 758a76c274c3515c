"""
HTTP JSON Poster - httpx.AsyncClient wrapper
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from core.exceptions import DeploymentTransportError
from .base import BaseJSONPoster


logger = logging.getLogger(__name__)


DEFAULT_TIMEOUT = 30.0


def encode_json(body: Dict[str, Any]) -> bytes:
    """Compact UTF-8 JSON, keys in insertion order"""
    return json.dumps(body, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


class HttpxJSONPoster(BaseJSONPoster):
    """POST JSON через httpx, один запрос без retry"""

    def __init__(
        self,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.timeout = timeout
        self._transport = transport

    async def post_json(self, url: str, body: Dict[str, Any]) -> int:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    url,
                    content=encode_json(body),
                    headers={"Content-Type": "application/json"}
                )
        except httpx.HTTPError as e:
            raise DeploymentTransportError(
                f"Could not send deployment info to Raygun: {type(e).__name__}: {e}"
            ) from e

        logger.debug(f"Raygun responded with {response.status_code}")
        return response.status_code
