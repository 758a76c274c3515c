"""
Git Revision Resolver - версия и ревизия для деплоя

Версия: последний тег при сортировке по version:refname.
Ревизия: первая строка git rev-list от этого тега.
"""

import logging
import shlex

from core.exceptions import EmptyOutputError
from integrations.base import BaseCommandRunner


logger = logging.getLogger(__name__)


TAG_COMMAND = "git tag --sort=version:refname | tail -n 1"
REVISION_COMMAND = "git rev-list {tag} | head -n 1"


class GitRevisionResolver:
    """Получает тег и хеш из локальной истории git"""

    def __init__(self, runner: BaseCommandRunner):
        self.runner = runner

    async def _exec(self, command: str) -> str:
        """Выполнить команду, вернуть stdout без пробелов по краям

        Raises:
            CommandError: If the command fails
            EmptyOutputError: If the command printed only whitespace
        """
        output = (await self.runner.run(command)).strip()
        if not output:
            raise EmptyOutputError(command)
        return output

    async def resolve_version(self) -> str:
        """Последний тег по семантической версии"""
        version = await self._exec(TAG_COMMAND)
        logger.debug(f"Latest tag: {version}")
        return version

    async def resolve_revision(self, version: str) -> str:
        """Первая ревизия, достижимая из тега"""
        revision = await self._exec(REVISION_COMMAND.format(tag=shlex.quote(version)))
        logger.debug(f"Revision for {version}: {revision}")
        return revision
