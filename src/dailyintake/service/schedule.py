# SPDX-License-Identifier: MIT

import asyncio
import logging
from typing import Callable, Optional

from dailyintake.repository.store import StorageError

logger = logging.getLogger(__name__)


class RecurringTask:
    """
    Runs a callback every `interval` seconds on the running event loop.

    The callback runs synchronously between sleeps, so it never interleaves
    with other tracker operations. Errors are logged and the loop carries on,
    except for storage failures, which end the task and surface when it is
    awaited.
    """

    def __init__(
        self,
        name: str,
        interval: float,
        callback: Callable[[], None],
        run_immediately: bool = False,
    ) -> None:
        self.name = name
        self.interval = interval
        self.callback = callback
        self.run_immediately = run_immediately
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _loop(self) -> None:
        if not self.run_immediately:
            await asyncio.sleep(self.interval)
        while True:
            try:
                self.callback()
            except StorageError:
                raise
            except Exception as e:
                logger.error(f"Error in recurring task {self.name}: {e}", exc_info=True)

            await asyncio.sleep(self.interval)

    def start(self) -> None:
        """Start the task. Must be called while an event loop is running."""
        if self.is_running:
            logger.warning(f"Recurring task {self.name} is already running")
            return

        self._task = asyncio.get_running_loop().create_task(
            self._loop(), name=self.name
        )
        logger.debug(f"Started recurring task {self.name} (interval: {self.interval}s)")

    def cancel(self) -> None:
        """Cancel without waiting for the task to finish unwinding."""
        if self._task is not None:
            self._task.cancel()
            self._task = None
            logger.debug(f"Cancelled recurring task {self.name}")

    async def stop(self) -> None:
        if self._task is None:
            return

        task = self._task
        self._task = None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

        logger.debug(f"Stopped recurring task {self.name}")
