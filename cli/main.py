"""
CLI Interface - task runner для raygun-deployment

Команды:
- raygun-tasks raygun-deployment - отправить деплой в Raygun.io
- raygun-tasks raygun-deployment --dry-run - показать payload без отправки
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from core.config import Config, load_config
from core.logging_config import setup_logging
from integrations.base import BaseTaskRunner
from integrations.http import HttpxJSONPoster
from integrations.shell import ShellCommandRunner
from pipeline.orchestrator import DeploymentPipeline
from cli.display import Display


TASK_NAME = "raygun-deployment"
TASK_DESCRIPTION = "Send deployment information for the latest git tag to Raygun.io"


class ClickTaskRunner(BaseTaskRunner):
    """Task host на базе click: печатает результат, код выхода ставит CLI"""

    def __init__(self, display: Display):
        self.display = display
        self.completed = False
        self.error: Optional[Exception] = None

    def report_fatal(self, error: Exception) -> None:
        self.error = error
        self.display.error(f"Fatal error: {error}")

    def signal_completion(self) -> None:
        self.completed = True
        self.display.success("Done.")

    @property
    def exit_code(self) -> int:
        return 0 if self.completed and self.error is None else 1


def build_pipeline(config: Config, project: Optional[str], dry_run: bool) -> DeploymentPipeline:
    """Собрать pipeline с реальными shell и httpx"""
    project_path = Path(project).resolve() if project else config.project_path
    return DeploymentPipeline(
        config=config,
        runner=ShellCommandRunner(cwd=project_path, timeout=config.command_timeout),
        poster=HttpxJSONPoster(timeout=config.request_timeout),
        dry_run=dry_run
    )


def register_task(group: click.Group) -> click.Command:
    """Зарегистрировать задачу raygun-deployment в группе команд"""

    @group.command(name=TASK_NAME, help=TASK_DESCRIPTION)
    @click.option('--project', '-p', type=click.Path(exists=True, file_okay=False),
                  help='Git repository to read tags from (default: GIT_PROJECT_PATH or cwd)')
    @click.option('--dry-run', is_flag=True, help='Resolve version and revision, print payload, send nothing')
    @click.pass_context
    def raygun_deployment(ctx, project: Optional[str], dry_run: bool):
        config: Optional[Config] = ctx.obj.get('config')

        if config is None:
            click.echo("Error: No config loaded. Check your .env file or --config", err=True)
            sys.exit(1)

        display = Display()
        display.header(TASK_NAME)

        pipeline = build_pipeline(config, project, dry_run)
        task = ClickTaskRunner(display)
        state = asyncio.run(pipeline.run(task))

        if dry_run and state.payload is not None:
            display.info(f"Would POST to https://{config.raygun_api_host}/deployments")
            display.payload(state.payload)

        sys.exit(task.exit_code)

    return raygun_deployment


@click.group()
@click.option('--config', '-c', type=click.Path(exists=True), help='Path to .env config file')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
@click.pass_context
def cli(ctx, config: Optional[str], verbose: bool):
    """Build tasks for reporting deployments to Raygun.io"""
    ctx.ensure_object(dict)

    try:
        ctx.obj['config'] = load_config(config)
    except ValidationError as e:
        click.echo(f"Error loading config: {e}", err=True)
        ctx.obj['config'] = None

    loaded = ctx.obj['config']
    setup_logging(
        level="DEBUG" if verbose else "INFO",
        log_dir=loaded.log_dir if loaded else None,
        json_format=loaded.log_json if loaded else False
    )
    ctx.obj['verbose'] = verbose


register_task(cli)


def main():
    """Entry point"""
    cli(obj={})


if __name__ == '__main__':
    main()
