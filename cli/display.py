"""
Display - вывод результата задачи в терминал
"""

import json
import logging
import sys
from typing import Any, Dict


logger = logging.getLogger(__name__)


class Colors:
    """ANSI цвета для терминала"""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"


class Display:
    """Класс для вывода информации в терминал с интеграцией logging"""

    def __init__(self, use_colors: bool = True):
        self.use_colors = use_colors and sys.stdout.isatty()
        self._logger = logging.getLogger("raygun_deployment.display")

    def _color(self, text: str, color: str) -> str:
        """Добавить цвет к тексту"""
        if not self.use_colors:
            return text
        return f"{color}{text}{Colors.RESET}"

    def _log(self, message: str, level: int = logging.DEBUG):
        self._logger.log(level, message.strip())

    def header(self, text: str):
        """Заголовок задачи, как у build runner"""
        print(self._color(f'Running "{text}" task', Colors.BOLD + Colors.CYAN))
        self._log(f"=== {text} ===")

    def info(self, text: str):
        print(self._color(f"  {text}", Colors.WHITE))
        self._log(text)

    def success(self, text: str):
        print(self._color(f"  ✓ {text}", Colors.GREEN))
        self._log(f"SUCCESS: {text}")

    def error(self, text: str):
        print(self._color(f"  ✗ {text}", Colors.RED))
        self._log(f"ERROR: {text}")

    def payload(self, body: Dict[str, Any]):
        """JSON, который ушел бы в Raygun (dry run)"""
        print(json.dumps(body, indent=2, ensure_ascii=False))
