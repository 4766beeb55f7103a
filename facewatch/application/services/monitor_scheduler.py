"""
Per-camera monitoring scheduler: one ticker task per camera on the event loop.

Every tick spawns one recognition cycle unless the previous cycle for the
same camera is still running, in which case the tick is skipped. Cycles
of different cameras run concurrently.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

from ...core.exceptions import InvalidInputError, NotFoundError
from ...domain.constants import MIN_MONITOR_INTERVAL_MS
from ...utils.datetime_utils import now_iso

logger = logging.getLogger(__name__)

CycleFn = Callable[[str, str], Awaitable[Any]]


# -----------------------------------------------------------------------------
# State per camera
# -----------------------------------------------------------------------------
@dataclass
class MonitorHandle:
    camera: str
    stream_url: str
    interval_ms: int
    started_at: str
    ticker_task: Optional[asyncio.Task] = None
    cycle_task: Optional[asyncio.Task] = None
    ticks: int = 0
    cycles_run: int = 0
    cycles_failed: int = 0
    ticks_skipped: int = 0
    last_error: Optional[str] = None
    last_cycle_at: Optional[str] = None

    @property
    def in_flight(self) -> bool:
        return self.cycle_task is not None and not self.cycle_task.done()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "camera": self.camera,
            "streamUrl": self.stream_url,
            "intervalMs": self.interval_ms,
            "startedAt": self.started_at,
            "ticks": self.ticks,
            "cyclesRun": self.cycles_run,
            "cyclesFailed": self.cycles_failed,
            "ticksSkipped": self.ticks_skipped,
            "inFlight": self.in_flight,
            "lastError": self.last_error,
            "lastCycleAt": self.last_cycle_at,
        }


# -----------------------------------------------------------------------------
# Scheduler
# -----------------------------------------------------------------------------
class MonitorScheduler:
    """
    Runs `cycle(camera, stream_url)` every interval for each monitored camera.

    - At most one handle per camera; start() on a monitored camera replaces it.
    - stop() cancels the ticker only; a cycle already running finishes.
    - A failing or timed-out cycle is logged and recorded, never fatal.
    """

    def __init__(self, cycle: CycleFn, cycle_timeout_seconds: Optional[float] = None) -> None:
        self._cycle = cycle
        self._cycle_timeout = cycle_timeout_seconds if cycle_timeout_seconds else None
        self._handles: Dict[str, MonitorHandle] = {}
        # Cycles of stopped handles, kept referenced until they finish
        self._draining: Set[asyncio.Task] = set()

    def start(self, camera: str, stream_url: str, interval_ms: int) -> MonitorHandle:
        """Start (or restart) monitoring. Must be called from a running event loop."""
        if interval_ms < MIN_MONITOR_INTERVAL_MS:
            raise InvalidInputError(
                f"Interval {interval_ms}ms is below the minimum of {MIN_MONITOR_INTERVAL_MS}ms"
            )

        previous_cycle: Optional[asyncio.Task] = None
        if camera in self._handles:
            logger.info("Monitoring already active for %s; replacing it", camera)
            previous = self.stop(camera)
            if previous.in_flight:
                previous_cycle = previous.cycle_task

        handle = MonitorHandle(
            camera=camera,
            stream_url=stream_url,
            interval_ms=int(interval_ms),
            started_at=now_iso(),
            cycle_task=previous_cycle,
        )
        handle.ticker_task = asyncio.create_task(self._tick_loop(handle))
        self._handles[camera] = handle
        logger.info(f"Started face monitoring for {camera} every {interval_ms}ms ({stream_url})")
        return handle

    def stop(self, camera: str) -> MonitorHandle:
        handle = self._handles.pop(camera, None)
        if handle is None:
            raise NotFoundError(f"No active monitoring for camera: {camera}")

        if handle.ticker_task and not handle.ticker_task.done():
            handle.ticker_task.cancel()
        if handle.in_flight:
            self._draining.add(handle.cycle_task)
            handle.cycle_task.add_done_callback(self._draining.discard)

        logger.info(f"Stopped face monitoring for {camera}")
        return handle

    async def shutdown(self) -> None:
        """Stop every camera and cancel cycles still running."""
        handles = [self.stop(camera) for camera in list(self._handles)]
        tasks: List[asyncio.Task] = []
        for handle in handles:
            if handle.ticker_task is not None:
                tasks.append(handle.ticker_task)
        for task in list(self._draining):
            if not task.done():
                task.cancel()
            tasks.append(task)

        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._draining.clear()
        logger.info("Monitor scheduler shut down (%d camera(s) stopped)", len(handles))

    def active_cameras(self) -> List[str]:
        return list(self._handles)

    def get_handle(self, camera: str) -> Optional[MonitorHandle]:
        return self._handles.get(camera)

    def stats(self, camera: str) -> Dict[str, Any]:
        handle = self._handles.get(camera)
        if handle is None:
            raise NotFoundError(f"No active monitoring for camera: {camera}")
        return handle.to_dict()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------
    async def _tick_loop(self, handle: MonitorHandle) -> None:
        interval = handle.interval_ms / 1000.0
        while True:
            await asyncio.sleep(interval)
            self._tick(handle)

    def _tick(self, handle: MonitorHandle) -> None:
        handle.ticks += 1
        if handle.in_flight:
            handle.ticks_skipped += 1
            logger.debug("Skipping tick for %s: previous cycle still running", handle.camera)
            return
        handle.cycle_task = asyncio.create_task(self._run_cycle(handle))

    async def _run_cycle(self, handle: MonitorHandle) -> None:
        try:
            if self._cycle_timeout is not None:
                await asyncio.wait_for(
                    self._cycle(handle.camera, handle.stream_url), timeout=self._cycle_timeout
                )
            else:
                await self._cycle(handle.camera, handle.stream_url)
            handle.cycles_run += 1
        except asyncio.TimeoutError:
            handle.cycles_failed += 1
            handle.last_error = f"Cycle timed out after {self._cycle_timeout}s"
            # The worker thread keeps running; only the guard is released
            logger.warning(
                "Monitoring cycle for %s abandoned after %ss", handle.camera, self._cycle_timeout
            )
        except Exception as e:
            handle.cycles_failed += 1
            handle.last_error = str(e) or e.__class__.__name__
            logger.exception(f"Error in monitoring cycle for {handle.camera}: {e}")
        finally:
            handle.last_cycle_at = now_iso()
