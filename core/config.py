"""
Configuration System - Pydantic Settings с .env поддержкой
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import MissingCredentialError


TOKEN_ENV_VAR = "RAYGUN_DEPLOY_TOKEN"
KEY_ENV_VAR = "RAYGUN_DEPLOY_KEY"


class Config(BaseSettings):
    """Конфигурация raygun-deployment"""

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )

    # Обязательно, но проверяется в load_credentials
    raygun_deploy_token: str = ""
    raygun_deploy_key: str = ""

    # Опционально - Raygun API
    raygun_api_host: str = "app.raygun.io"
    raygun_api_port: int = 443
    request_timeout: float = 30.0

    # Опционально - Git
    git_project_path: str = "."
    command_timeout: float = 120.0

    # Опционально - Logging
    log_dir: Optional[str] = None
    log_json: bool = False

    @field_validator('request_timeout', 'command_timeout')
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeouts are positive"""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator('raygun_api_port')
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in TCP range"""
        if not 0 < v < 65536:
            raise ValueError(f"Invalid port: {v}")
        return v

    @property
    def project_path(self) -> Path:
        return Path(self.git_project_path).expanduser()


@dataclass(frozen=True)
class Credentials:
    """Токены для Raygun API"""
    deploy_token: str
    deploy_key: str

    def __repr__(self) -> str:
        return "Credentials(deploy_token='***', deploy_key='***')"


def load_credentials(config: Config) -> Credentials:
    """Проверить и вернуть токены

    Raises:
        MissingCredentialError: If either variable is missing or empty
    """
    if not config.raygun_deploy_token:
        raise MissingCredentialError(TOKEN_ENV_VAR)

    if not config.raygun_deploy_key:
        raise MissingCredentialError(KEY_ENV_VAR)

    return Credentials(
        deploy_token=config.raygun_deploy_token,
        deploy_key=config.raygun_deploy_key
    )


def load_config(env_file: Optional[str] = None) -> Config:
    """Загрузить конфигурацию"""
    if env_file:
        return Config(_env_file=env_file)
    return Config()
