from __future__ import annotations
import asyncio
import logging
import time
from typing import Dict

from ..errors import RoundNotActiveError
from ..session import GameSession

SYNC_INTERVAL = 5.0  # seconds

class TimerManager:
    """One round clock per player: ticks the session and keeps the client in sync."""

    def __init__(self, sio, tick_seconds: float = 1.0):
        self.sio = sio
        self.tick_seconds = tick_seconds
        self._tasks: Dict[str, asyncio.Task] = {}

    def start(self, sid: str, session: GameSession) -> asyncio.Task:
        self.stop(sid)
        task = asyncio.create_task(self._run(sid, session))
        self._tasks[sid] = task
        return task

    def stop(self, sid: str):
        task = self._tasks.pop(sid, None)
        if task and not task.done():
            task.cancel()

    def stop_all(self):
        for sid in list(self._tasks):
            self.stop(sid)

    def running(self, sid: str) -> bool:
        task = self._tasks.get(sid)
        return task is not None and not task.done()

    async def _run(self, sid: str, session: GameSession):
        # Background loop: tick, emit sync, handle expiration
        next_sync = time.monotonic() + SYNC_INTERVAL
        try:
            while True:
                await asyncio.sleep(self.tick_seconds)
                ended = session.tick()
                if ended:
                    await self.sio.emit('timer-sync', session.timer_state().model_dump(), to=sid)
                    await self._emit_summary(sid, session)
                    break
                if session.status != 'in_progress':
                    # finished some other way; the summary went out there
                    break
                if time.monotonic() >= next_sync:
                    await self.sio.emit('timer-sync', session.timer_state().model_dump(), to=sid)
                    next_sync = time.monotonic() + SYNC_INTERVAL
        except asyncio.CancelledError:
            return
        finally:
            if self._tasks.get(sid) is asyncio.current_task():
                del self._tasks[sid]

    async def _emit_summary(self, sid: str, session: GameSession):
        try:
            summary = session.summary()
        except RoundNotActiveError as e:
            logging.warning(f"No summary for {sid}: {e}")
            return
        await self.sio.emit('round:over', summary.model_dump(), to=sid)

