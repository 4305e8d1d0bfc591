"""Tests for the background task queue."""

import asyncio


class TestTaskService:
    async def test_runs_submitted_work(self, core):
        done = []

        async def work():
            done.append(True)

        core.services.task.submit("work", work())
        await core.services.task.drain()

        assert done == [True]

    async def test_failure_does_not_propagate(self, core):
        """Test that a failing task is logged and the queue keeps working."""
        done = []

        async def broken():
            raise OSError("disk full")

        async def work():
            done.append(True)

        core.services.task.submit("broken", broken())
        core.services.task.submit("work", work())
        await core.services.task.drain()

        assert done == [True]

    async def test_drain_waits_for_slow_tasks(self, core):
        done = []

        async def slow():
            await asyncio.sleep(0.01)
            done.append(True)

        core.services.task.submit("slow", slow())
        assert done == []
        await core.services.task.drain()
        assert done == [True]
