import asyncio
import logging
from typing import Awaitable, Callable, Dict, Optional, Set

from pos_client.errors import PosClientError
from pos_client.events import BaseEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[BaseEvent], None]
ErrorHandler = Callable[[PosClientError], None]


class EventDispatcher:
    """Single-consumer event queue.

    Handlers are plain functions and run to completion one event at a time.
    Remote calls are started with spawn() and report back by posting a new
    event, so nothing interleaves inside a handler.
    """

    def __init__(self, on_error: Optional[ErrorHandler] = None):
        self.queue: "asyncio.Queue[BaseEvent]" = asyncio.Queue()
        self.on_error = on_error
        self.processed = 0
        self._handlers: Dict[str, EventHandler] = {}
        self._tasks: Set["asyncio.Task[None]"] = set()
        self._running = False
        self.register("session.quit_requested", self._handle_quit)

    def register(self, event_type: str, handler: EventHandler) -> None:
        self._handlers[event_type] = handler

    def post(self, event: BaseEvent) -> None:
        self.queue.put_nowait(event)

    def spawn(self, coro: Awaitable[None]) -> "asyncio.Task[None]":
        """Run a coroutine in the background, tracked until it finishes."""
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: "asyncio.Task[None]") -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Background task failed: {task.exception()!r}")

    def dispatch(self, event: BaseEvent) -> None:
        """Run the handler for one event. Errors are reported, never raised."""
        handler = self._handlers.get(event.event_type)
        if handler is None:
            logger.warning(f"No handler for event {event.event_type}, skipping")
            return

        try:
            handler(event)
        except PosClientError as e:
            logger.warning(f"{e}", extra={"event_type": event.event_type})
            if self.on_error:
                self.on_error(e)
        except Exception as e:
            logger.error(
                f"Unexpected error handling {event.event_type}: {e}",
                exc_info=True,
                extra={"event_type": event.event_type},
            )
        finally:
            self.processed += 1

    async def run(self) -> None:
        """Process events until a quit event is handled."""
        self._running = True
        while self._running:
            event = await self.queue.get()
            self.dispatch(event)
            self.queue.task_done()

    async def drain(self) -> None:
        """Process queued events and wait out background tasks until both are empty."""
        while True:
            while not self.queue.empty():
                self.dispatch(self.queue.get_nowait())
                self.queue.task_done()
            if not self._tasks:
                return
            await asyncio.wait(set(self._tasks))

    def _handle_quit(self, event: BaseEvent) -> None:
        logger.info("Quit requested")
        self._running = False

    async def shutdown(self) -> None:
        """Cancel any background work still running."""
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.wait(set(self._tasks))
