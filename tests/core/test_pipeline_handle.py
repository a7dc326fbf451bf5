"""
Test suite for PipelineHandle.

Tests single-flight initialization, failure retry, cancellation and reset.

System role: Verification of shared pipeline lifecycle
"""

import asyncio

import pytest

from ragchat.core.rag_pipeline import HandleState, PipelineHandle


class CountingFactory:
    """Async factory that records calls and can fail on demand."""

    def __init__(self, failures: int = 0, delay: float = 0.01) -> None:
        self.calls = 0
        self.failures = failures
        self.delay = delay

    async def __call__(self) -> dict:
        self.calls += 1
        await asyncio.sleep(self.delay)
        if self.calls <= self.failures:
            raise RuntimeError(f"build failed (attempt {self.calls})")
        return {"built": self.calls}


class TestPipelineHandleSingleFlight:
    """Test suite for concurrent initialization."""

    @pytest.mark.asyncio
    async def test_concurrent_get_should_build_once(self) -> None:
        # Arrange
        factory = CountingFactory()
        handle = PipelineHandle(factory)

        # Act
        results = await asyncio.gather(*(handle.get() for _ in range(5)))

        # Assert
        assert factory.calls == 1
        assert all(result is results[0] for result in results)
        assert handle.state is HandleState.READY
        assert handle.attempts == 1

    @pytest.mark.asyncio
    async def test_ready_handle_should_not_rebuild(self) -> None:
        factory = CountingFactory()
        handle = PipelineHandle(factory)

        first = await handle.get()
        second = await handle.get()

        assert first is second
        assert factory.calls == 1
        assert handle.current is first

    def test_current_should_not_trigger_build(self) -> None:
        factory = CountingFactory()
        handle = PipelineHandle(factory)

        assert handle.current is None
        assert handle.is_ready is False
        assert handle.state is HandleState.UNINITIALIZED
        assert factory.calls == 0


class TestPipelineHandleFailure:
    """Test suite for failed initialization."""

    @pytest.mark.asyncio
    async def test_failure_should_propagate_and_be_retried(self) -> None:
        # Arrange
        factory = CountingFactory(failures=1)
        handle = PipelineHandle(factory)

        # Act & Assert
        with pytest.raises(RuntimeError, match="attempt 1"):
            await handle.get()

        assert handle.state is HandleState.FAILED
        assert isinstance(handle.last_error, RuntimeError)
        assert handle.current is None

        value = await handle.get()

        assert value == {"built": 2}
        assert handle.state is HandleState.READY
        assert handle.last_error is None
        assert handle.attempts == 2

    @pytest.mark.asyncio
    async def test_concurrent_waiters_should_share_failure(self) -> None:
        factory = CountingFactory(failures=1)
        handle = PipelineHandle(factory)

        results = await asyncio.gather(
            *(handle.get() for _ in range(3)),
            return_exceptions=True,
        )

        assert factory.calls == 1
        assert all(isinstance(result, RuntimeError) for result in results)


class TestPipelineHandleCancellation:
    """Test suite for cancellation and reset."""

    @pytest.mark.asyncio
    async def test_cancelled_waiter_should_not_cancel_build(self) -> None:
        # Arrange
        gate = asyncio.Event()
        calls = 0

        async def factory() -> str:
            nonlocal calls
            calls += 1
            await gate.wait()
            return "pipeline"

        handle = PipelineHandle(factory)
        waiter = asyncio.create_task(handle.get())
        await asyncio.sleep(0)

        # Act
        waiter.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiter
        gate.set()

        # Assert
        assert await handle.get() == "pipeline"
        assert calls == 1

    @pytest.mark.asyncio
    async def test_reset_should_force_rebuild(self) -> None:
        factory = CountingFactory()
        handle = PipelineHandle(factory)
        await handle.get()

        handle.reset()

        assert handle.state is HandleState.UNINITIALIZED
        assert handle.current is None
        assert await handle.get() == {"built": 2}
        assert factory.calls == 2
