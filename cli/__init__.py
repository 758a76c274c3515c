"""CLI module"""

from .main import cli, main, register_task, ClickTaskRunner, TASK_NAME
from .display import Display, Colors

__all__ = [
    "cli",
    "main",
    "register_task",
    "ClickTaskRunner",
    "TASK_NAME",
    "Display",
    "Colors",
]
