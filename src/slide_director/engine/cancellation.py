"""Cooperative cancellation for agent runs."""

import asyncio
from typing import Awaitable, TypeVar

from slide_director.domain.exceptions import RunCancelledError

T = TypeVar("T")


class CancellationToken:
    """
    Flag a caller sets to ask the active run to stop.

    The run observes it only at its checkpoints; work in progress at a tool
    call is never interrupted.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        """Raises RunCancelledError when cancellation was requested."""

        if self._event.is_set():
            raise RunCancelledError("Run cancelled")

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """
        Awaits ``awaitable`` unless cancellation arrives first.

        Args:
            awaitable: The operation to wait on, typically a model call.

        Returns:
            The operation's result.

        Raises:
            RunCancelledError: If cancelled before the operation finished. The
                operation's task is cancelled.
        """
        self.raise_if_cancelled()
        work = asyncio.ensure_future(awaitable)
        stop = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait(
                {work, stop}, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            work.cancel()
            raise
        finally:
            stop.cancel()
        if work in done:
            return work.result()
        work.cancel()
        raise RunCancelledError("Run cancelled")
