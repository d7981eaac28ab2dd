"""Tests for the playlist creation workflow."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from sound_whiskers.exceptions import ApiError
from sound_whiskers.models import CreatePlaylistCommand, Playlist
from sound_whiskers.notifications import Severity
from sound_whiskers.workflows.creation import (
    CREATED_MESSAGE,
    CREATION_FAILED_MESSAGE,
    CreationWorkflow,
)


@pytest.fixture
def command():
    return CreatePlaylistCommand(name="Road trip", description="Windows down")


@pytest.fixture
def playlist():
    return Playlist(id="p1", name="Road trip", description="Windows down")


class TestCreate:

    @pytest.mark.asyncio
    async def test_success_returns_entity(self, sink, command, playlist):
        operation = AsyncMock(return_value=playlist)
        workflow = CreationWorkflow(operation, sink)

        result = await workflow.create(command)

        assert result is playlist
        operation.assert_awaited_once_with(command)
        assert sink.messages(Severity.SUCCESS) == [CREATED_MESSAGE]
        assert not workflow.is_creating

    @pytest.mark.asyncio
    async def test_async_fault_returns_none(self, sink, command):
        workflow = CreationWorkflow(AsyncMock(side_effect=ApiError(409, "CONFLICT", "duplicate name")), sink)

        result = await workflow.create(command)

        assert result is None
        assert len(sink.notifications) == 1
        assert sink.notifications[0].severity is Severity.ERROR
        assert "duplicate name" in sink.notifications[0].message
        assert not workflow.is_creating

    @pytest.mark.asyncio
    async def test_sync_fault_returns_none(self, sink, command):
        operation = Mock(side_effect=RuntimeError("duplicate name"))
        workflow = CreationWorkflow(operation, sink)

        result = await workflow.create(command)

        assert result is None
        assert sink.messages(Severity.ERROR) == ["duplicate name"]
        assert not workflow.is_creating

    @pytest.mark.asyncio
    async def test_plain_callable_result(self, sink, command, playlist):
        workflow = CreationWorkflow(lambda cmd: playlist, sink)

        assert await workflow.create(command) is playlist
        assert not workflow.is_creating

    @pytest.mark.asyncio
    async def test_fault_without_message_uses_generic(self, sink, command):
        workflow = CreationWorkflow(AsyncMock(side_effect=RuntimeError()), sink)

        await workflow.create(command)

        assert sink.messages() == [CREATION_FAILED_MESSAGE]

    @pytest.mark.asyncio
    async def test_is_creating_true_while_pending(self, sink, command, playlist):
        observed = []
        workflow = None

        async def operation(cmd):
            observed.append(workflow.is_creating)
            return playlist

        workflow = CreationWorkflow(operation, sink)
        assert not workflow.is_creating

        await workflow.create(command)

        assert observed == [True]
        assert not workflow.is_creating

    @pytest.mark.asyncio
    async def test_is_creating_true_before_sync_raise(self, sink, command):
        observed = []
        workflow = None

        def operation(cmd):
            observed.append(workflow.is_creating)
            raise ValueError("bad payload")

        workflow = CreationWorkflow(operation, sink)

        await workflow.create(command)

        assert observed == [True]
        assert not workflow.is_creating

    @pytest.mark.asyncio
    async def test_second_call_rejected_while_pending(self, sink, command, playlist):
        release = asyncio.Event()

        async def operation(cmd):
            await release.wait()
            return playlist

        workflow = CreationWorkflow(operation, sink)

        first = asyncio.ensure_future(workflow.create(command))
        await asyncio.sleep(0)
        assert workflow.is_creating
        second = await workflow.create(command)
        release.set()

        assert second is None
        assert await first is playlist
        assert [n.severity for n in sink.notifications] == [Severity.WARNING, Severity.SUCCESS]

    @pytest.mark.asyncio
    async def test_cancellation_clears_flag(self, sink, command):
        async def operation(cmd):
            await asyncio.Event().wait()

        workflow = CreationWorkflow(operation, sink)
        task = asyncio.ensure_future(workflow.create(command))
        await asyncio.sleep(0)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert not workflow.is_creating
