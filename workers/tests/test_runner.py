"""Tests for the worker runner entrypoint."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from gatehouse_shared.task_queues import AUTH_QUEUE
from gatehouse_workers import runner


@pytest.mark.asyncio
async def test_unknown_component_exits() -> None:
    with pytest.raises(SystemExit) as exc:
        await runner.run_worker("billing")
    assert exc.value.code == 1


@pytest.mark.asyncio
async def test_auth_worker_polls_auth_queue() -> None:
    worker = MagicMock()
    worker.run = AsyncMock()

    with (
        patch("gatehouse_workers.runner.get_core") as get_core,
        patch("gatehouse_workers.runner.connect", AsyncMock(return_value="client")),
        patch("gatehouse_workers.runner.Worker", return_value=worker) as worker_cls,
    ):
        await runner.run_worker("auth")

    get_core.assert_called_once()
    worker_cls.assert_called_once()
    assert worker_cls.call_args.kwargs["task_queue"] == AUTH_QUEUE
    assert len(worker_cls.call_args.kwargs["activities"]) == 3
    worker.run.assert_awaited_once()


@pytest.mark.asyncio
async def test_missing_secret_fails_before_connecting() -> None:
    connect = AsyncMock()
    with (
        patch("gatehouse_workers.runner.get_core", side_effect=ValueError("AUTH_JWT_SECRET")),
        patch("gatehouse_workers.runner.connect", connect),
    ):
        with pytest.raises(ValueError):
            await runner.run_worker("auth")
    connect.assert_not_awaited()


def test_main_without_component_prints_usage(capsys) -> None:
    with (
        patch("sys.argv", ["runner"]),
        patch.dict("os.environ", {}, clear=True),
        pytest.raises(SystemExit),
    ):
        runner.main()
    assert "Usage" in capsys.readouterr().out
