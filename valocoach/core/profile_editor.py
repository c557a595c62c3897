"""Debounced persistence of profile edits."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from valocoach.auth.context import AuthContext

logger = logging.getLogger(__name__)


class Debouncer:
    """Collapses rapid triggers into one call after a quiet period.

    Every ``trigger()`` cancels the waiting timer and starts a new one, so
    ``action`` runs once, ``delay`` seconds after the last trigger. An action
    that has already started is never cancelled; a trigger during it only
    schedules the next run.
    """

    def __init__(self, delay: float, action: Callable[[], Awaitable[Any]]):
        self.delay = delay
        self.action = action
        self._timer: asyncio.Task | None = None
        self._running: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def trigger(self) -> None:
        """(Re)start the timer. Must be called from a running event loop."""
        self.cancel()
        self._timer = asyncio.get_running_loop().create_task(self._run())

    def cancel(self) -> None:
        if self.pending:
            self._timer.cancel()
        self._timer = None

    async def flush(self) -> None:
        """Run the action now if a call is scheduled."""
        if not self.pending:
            return
        self.cancel()
        await self.action()

    async def _run(self) -> None:
        await asyncio.sleep(self.delay)
        # Past the quiet period: hand the task over so cancel() leaves it alone.
        self._running, self._timer = self._timer, None
        await self.action()


class ProfileEditor:
    """Accumulates profile edits and saves them after typing stops."""

    def __init__(self, auth: AuthContext, delay: float = 1.0):
        self.auth = auth
        self._changes: dict[str, Any] = {}
        self._debouncer = Debouncer(delay, self._save)

    @property
    def has_unsaved_changes(self) -> bool:
        return bool(self._changes)

    def edit(self, **fields: Any) -> None:
        """Record changed fields and restart the save timer."""
        if not self.auth.is_authenticated:
            return
        self._changes.update(fields)
        self._debouncer.trigger()

    async def flush(self) -> None:
        """Save outstanding edits immediately."""
        await self._debouncer.flush()

    def cancel(self) -> None:
        self._debouncer.cancel()
        self._changes.clear()

    async def _save(self) -> None:
        changes, self._changes = self._changes, {}
        if not changes:
            return
        try:
            await self.auth.save_profile(changes)
        except ValueError as e:
            logger.warning("Rejected profile edit %s: %s", sorted(changes), e)
