"""
Shell Command Runner - asyncio subprocess через /bin/sh
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

from core.exceptions import CommandError
from .base import BaseCommandRunner


logger = logging.getLogger(__name__)


DEFAULT_COMMAND_TIMEOUT = 120.0


class ShellCommandRunner(BaseCommandRunner):
    """Выполняет команды через shell в директории проекта"""

    def __init__(
        self,
        cwd: Optional[Union[str, Path]] = None,
        timeout: Optional[float] = DEFAULT_COMMAND_TIMEOUT
    ):
        self.cwd = Path(cwd) if cwd is not None else None
        self.timeout = timeout

    async def run(self, command: str) -> str:
        logger.debug(f"Running: {command}")
        try:
            process = await asyncio.create_subprocess_shell(
                command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self.cwd
            )
        except OSError as e:
            raise CommandError(f"Failed to run '{command}': {e}", command=command) from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise CommandError(
                f"Command '{command}' timed out after {self.timeout}s",
                command=command
            )

        err_text = stderr.decode("utf-8", errors="replace")
        if process.returncode != 0:
            raise CommandError(
                f"Command '{command}' failed with exit code {process.returncode}: {err_text.strip()}",
                command=command,
                returncode=process.returncode,
                stderr=err_text
            )

        return stdout.decode("utf-8", errors="replace")
