import asyncio
from enum import Enum
from typing import Any, Coroutine, Generic, TypeVar

T = TypeVar("T")


class TaskState(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


class TaskHandle(Generic[T]):
    """Caller-visible state of a background coroutine."""

    def __init__(self, coro: Coroutine[Any, Any, T], name: str | None = None) -> None:
        self._task: asyncio.Task[T] = asyncio.get_running_loop().create_task(coro, name=name)

    @property
    def state(self) -> TaskState:
        if not self._task.done():
            return TaskState.PENDING
        if self._task.cancelled():
            return TaskState.CANCELLED
        if self._task.exception() is not None:
            return TaskState.FAILED
        return TaskState.SUCCEEDED

    @property
    def done(self) -> bool:
        return self._task.done()

    def exception(self) -> BaseException | None:
        if not self._task.done() or self._task.cancelled():
            return None
        return self._task.exception()

    def cancel(self) -> bool:
        return self._task.cancel()

    async def wait(self) -> T:
        return await self._task

    def __repr__(self) -> str:
        return f"<TaskHandle {self._task.get_name()} {self.state.value}>"
