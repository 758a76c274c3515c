"""
Unit tests for pipeline module
"""

import json

import httpx
import pytest

from core.config import Config
from core.exceptions import (
    ApiError,
    CommandError,
    DeploymentTransportError,
    EmptyOutputError,
    ForbiddenError,
    MissingCredentialError,
    UnauthorizedError,
)
from integrations.http import HttpxJSONPoster
from integrations.raygun import DeploymentOutcome
from pipeline.git_manager import GitRevisionResolver, TAG_COMMAND
from pipeline.orchestrator import DeploymentPipeline, PipelineStage, PipelineStatus


class TestGitRevisionResolver:
    """Tests for GitRevisionResolver"""

    @pytest.mark.asyncio
    async def test_resolve_version_trims_output(self, make_runner):
        """Should return last tag without surrounding whitespace"""
        runner = make_runner(["v1.0.0\n"])
        version = await GitRevisionResolver(runner).resolve_version()
        assert version == "v1.0.0"
        assert runner.commands == [TAG_COMMAND]

    @pytest.mark.asyncio
    async def test_resolve_revision_uses_tag(self, make_runner):
        """Should run rev-list for the given tag"""
        runner = make_runner(["  r4nD0m\n"])
        revision = await GitRevisionResolver(runner).resolve_revision("v1.0.0")
        assert revision == "r4nD0m"
        assert runner.commands == ["git rev-list v1.0.0 | head -n 1"]

    @pytest.mark.asyncio
    async def test_resolve_revision_quotes_tag(self, make_runner):
        """Should shell-quote tags with unusual characters"""
        runner = make_runner(["abc"])
        await GitRevisionResolver(runner).resolve_revision("v1; rm -rf /")
        assert runner.commands == ["git rev-list 'v1; rm -rf /' | head -n 1"]

    @pytest.mark.asyncio
    async def test_blank_output_raises(self, make_runner):
        """Should raise EmptyOutputError on whitespace-only output"""
        runner = make_runner([" \n\t"])
        with pytest.raises(EmptyOutputError):
            await GitRevisionResolver(runner).resolve_version()

    @pytest.mark.asyncio
    async def test_command_error_propagates(self, make_runner):
        """Should pass the runner's error through unchanged"""
        error = CommandError("git exploded", command=TAG_COMMAND, returncode=128)
        runner = make_runner([error])
        with pytest.raises(CommandError) as exc_info:
            await GitRevisionResolver(runner).resolve_version()
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_no_format_validation(self, make_runner):
        """Any non-blank output is accepted as a version"""
        runner = make_runner(["not a semver at all\n"])
        assert await GitRevisionResolver(runner).resolve_version() == "not a semver at all"


class TestDeploymentPipeline:
    """Tests for DeploymentPipeline"""

    @pytest.mark.asyncio
    async def test_success_flow(self, config, task, make_runner, make_poster):
        """Should resolve tag, then revision, then report with trimmed values"""
        runner = make_runner(["v1.0.0\n", "r4nD0m\n"])
        poster = make_poster(200)

        state = await DeploymentPipeline(config, runner, poster).run(task)

        assert runner.commands == [TAG_COMMAND, "git rev-list v1.0.0 | head -n 1"]
        assert poster.calls == [(
            "https://app.raygun.io/deployments?authToken=user",
            {"apiKey": "app", "version": "v1.0.0", "scmIdentifier": "r4nD0m"},
        )]
        assert task.completions == 1
        assert task.fatal_errors == []
        assert state.status == PipelineStatus.COMPLETED
        assert state.stage == PipelineStage.REQUEST_SENT
        assert state.outcome == DeploymentOutcome.SUCCESS

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token,key,missing", [
        ("", "app", "RAYGUN_DEPLOY_TOKEN"),
        ("user", "", "RAYGUN_DEPLOY_KEY"),
    ])
    async def test_missing_credential_short_circuits(self, task, make_runner, make_poster, token, key, missing):
        """Should fail before any command or request"""
        config = Config(_env_file=None, raygun_deploy_token=token, raygun_deploy_key=key)
        runner = make_runner([])
        poster = make_poster(200)

        state = await DeploymentPipeline(config, runner, poster).run(task)

        assert runner.commands == []
        assert poster.calls == []
        assert task.completions == 0
        assert len(task.fatal_errors) == 1
        assert isinstance(task.fatal_errors[0], MissingCredentialError)
        assert missing in str(task.fatal_errors[0])
        assert state.status == PipelineStatus.FAILED
        assert state.stage == PipelineStage.START

    @pytest.mark.asyncio
    async def test_blank_tag_stops_pipeline(self, config, task, make_runner, make_poster):
        """Should not resolve the revision when the tag output is blank"""
        runner = make_runner(["   \n"])
        poster = make_poster(200)

        state = await DeploymentPipeline(config, runner, poster).run(task)

        assert runner.commands == [TAG_COMMAND]
        assert poster.calls == []
        assert isinstance(task.fatal_errors[0], EmptyOutputError)
        assert state.stage == PipelineStage.CREDENTIALS_CHECKED

    @pytest.mark.asyncio
    async def test_blank_revision_stops_pipeline(self, config, task, make_runner, make_poster):
        """Should not send anything when the revision output is blank"""
        runner = make_runner(["v1.0.0", ""])
        poster = make_poster(200)

        state = await DeploymentPipeline(config, runner, poster).run(task)

        assert poster.calls == []
        assert isinstance(task.fatal_errors[0], EmptyOutputError)
        assert state.stage == PipelineStage.VERSION_RESOLVED
        assert state.version == "v1.0.0"

    @pytest.mark.asyncio
    async def test_command_failure_is_fatal(self, config, task, make_runner, make_poster):
        runner = make_runner([CommandError("not a git repository", returncode=128)])
        poster = make_poster(200)

        await DeploymentPipeline(config, runner, poster).run(task)

        assert isinstance(task.fatal_errors[0], CommandError)
        assert poster.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code,error_type,outcome,needle", [
        (401, UnauthorizedError, DeploymentOutcome.UNAUTHORIZED, "raygunAuthToken"),
        (403, ForbiddenError, DeploymentOutcome.FORBIDDEN, "raygunApiKey"),
        (500, ApiError, DeploymentOutcome.OTHER_ERROR, "500"),
    ])
    async def test_error_status_codes(self, config, task, make_runner, make_poster,
                                      status_code, error_type, outcome, needle):
        """Should map each failure status to its own fatal error"""
        runner = make_runner(["v1.0.0", "r4nD0m"])
        poster = make_poster(status_code)

        state = await DeploymentPipeline(config, runner, poster).run(task)

        assert task.completions == 0
        assert len(task.fatal_errors) == 1
        assert isinstance(task.fatal_errors[0], error_type)
        assert needle in str(task.fatal_errors[0])
        assert state.outcome == outcome
        assert state.stage == PipelineStage.REQUEST_SENT

    @pytest.mark.asyncio
    async def test_transport_error_is_fatal(self, config, task, make_runner, make_poster):
        """Should report connection failures without retrying"""
        runner = make_runner(["v1.0.0", "r4nD0m"])
        poster = make_poster(error=DeploymentTransportError("connection refused"))

        state = await DeploymentPipeline(config, runner, poster).run(task)

        assert len(poster.calls) == 1
        assert isinstance(task.fatal_errors[0], DeploymentTransportError)
        assert state.result is None
        assert state.stage == PipelineStage.REVISION_RESOLVED

    @pytest.mark.asyncio
    async def test_dry_run_skips_request(self, config, task, make_runner, make_poster):
        """Should build the payload and complete without posting"""
        runner = make_runner(["v1.0.0", "r4nD0m"])
        poster = make_poster(500)

        state = await DeploymentPipeline(config, runner, poster, dry_run=True).run(task)

        assert poster.calls == []
        assert task.completions == 1
        assert state.payload == {"apiKey": "app", "version": "v1.0.0", "scmIdentifier": "r4nD0m"}

    @pytest.mark.asyncio
    async def test_custom_api_host(self, task, make_runner, make_poster):
        """Should send to the configured host"""
        config = Config(_env_file=None, raygun_deploy_token="user", raygun_deploy_key="app",
                        raygun_api_host="raygun.internal", raygun_api_port=8443)
        runner = make_runner(["v2", "abc"])
        poster = make_poster(200)

        await DeploymentPipeline(config, runner, poster).run(task)

        assert poster.calls[0][0] == "https://raygun.internal:8443/deployments?authToken=user"

    @pytest.mark.asyncio
    async def test_wire_request_example(self, config, task, make_runner):
        """Should put the exact example request on the wire"""
        captured = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200)

        runner = make_runner(["v1.0.0\n", "r4nD0m\n"])
        poster = HttpxJSONPoster(transport=httpx.MockTransport(handler))

        await DeploymentPipeline(config, runner, poster).run(task)

        assert task.completions == 1
        request = captured[0]
        assert request.method == "POST"
        assert request.url.host == "app.raygun.io"
        assert request.url.raw_path == b"/deployments?authToken=user"
        assert request.headers["Content-Type"] == "application/json"
        assert request.content == b'{"apiKey":"app","version":"v1.0.0","scmIdentifier":"r4nD0m"}'
        assert json.loads(request.content) == {
            "apiKey": "app", "version": "v1.0.0", "scmIdentifier": "r4nD0m"
        }
