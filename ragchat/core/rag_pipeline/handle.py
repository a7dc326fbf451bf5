"""
Lazily built, shared pipeline handle with single-flight initialization.

Holds the vector store / QA chain bundle for the whole process. The first
caller starts the build; every caller that arrives while it is running awaits
the same attempt. A failed attempt is not cached: the next caller retries.

Dependencies: asyncio
System role: Process-wide owner of the external pipeline handle
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HandleState(str, Enum):
    """Lifecycle of a PipelineHandle."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class PipelineHandle(Generic[T]):
    """
    Explicit state holder around an async factory.

    States: UNINITIALIZED -> INITIALIZING -> READY, or INITIALIZING -> FAILED.
    FAILED goes back to UNINITIALIZED on the next get(), which retries.
    """

    def __init__(self, factory: Callable[[], Awaitable[T]], name: str = "rag-pipeline") -> None:
        """
        Initialize handle.

        Args:
            factory: Coroutine function building the shared value
            name: Label used in log messages
        """
        self._factory = factory
        self._name = name
        self._state = HandleState.UNINITIALIZED
        self._value: T | None = None
        self._task: asyncio.Task[T] | None = None
        self._last_error: BaseException | None = None
        self._attempts = 0

    @property
    def state(self) -> HandleState:
        """Current lifecycle state."""
        return self._state

    @property
    def current(self) -> T | None:
        """Built value when READY, else None. Never triggers a build."""
        return self._value if self._state is HandleState.READY else None

    @property
    def is_ready(self) -> bool:
        return self._state is HandleState.READY

    @property
    def last_error(self) -> BaseException | None:
        """Error of the most recent failed attempt."""
        return self._last_error

    @property
    def attempts(self) -> int:
        """Number of factory invocations so far."""
        return self._attempts

    async def get(self) -> T:
        """
        Return the shared value, building it at most once at a time.

        Returns:
            T: The built value

        Raises:
            Exception: Whatever the factory raised for the attempt this
                caller joined
        """
        if self._state is HandleState.READY:
            return self._value  # type: ignore[return-value]

        if self._task is None:
            if self._state is HandleState.FAILED:
                logger.info(f"{__name__}:get - Retrying {self._name} after failed attempt")
                self._state = HandleState.UNINITIALIZED
            self._start()

        # Shield so one cancelled waiter does not cancel the shared build
        return await asyncio.shield(self._task)

    def _start(self) -> None:
        self._state = HandleState.INITIALIZING
        self._attempts += 1
        logger.info(f"{__name__}:_start - Initializing {self._name} (attempt {self._attempts})")
        self._task = asyncio.ensure_future(self._run())

    async def _run(self) -> T:
        # A reset() may have replaced this attempt; only the live task updates state
        task = asyncio.current_task()
        try:
            value = await self._factory()
        except BaseException as e:
            if self._task is task:
                self._state = HandleState.FAILED
                self._last_error = e
                self._task = None
            logger.error(f"{__name__}:_run - {self._name} initialization failed: {type(e).__name__}: {e}")
            raise

        if self._task is task:
            self._value = value
            self._last_error = None
            self._state = HandleState.READY
            self._task = None
            logger.info(f"{__name__}:_run - {self._name} ready")
        return value

    def reset(self) -> None:
        """Drop the cached value so the next get() rebuilds it."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._value = None
        self._last_error = None
        self._state = HandleState.UNINITIALIZED
