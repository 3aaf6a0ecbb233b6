"""Randomized "N people viewing" notification for the open property."""

import asyncio
import random
from typing import Callable, Optional

from src.utils.config import ShowcaseConfig
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

Sampler = Callable[[int, int], int]


def uniform_sampler(low: int, high: int) -> int:
    """Uniform integer in [low, high], both ends included."""
    return random.randint(low, high)


def viewer_message(count: int) -> str:
    return f"{count} people are viewing this property right now"


def _noop_show(count: int, message: str) -> None:
    pass


def _noop_hide() -> None:
    pass


class ViewerSession:
    """Timers for one detail-view session: initial one-shot, repeat task and pending hide."""

    def __init__(self, simulator: "ViewerCountSimulator", low: int, high: int):
        self.simulator = simulator
        self.low, self.high = (low, high) if low <= high else (high, low)
        self.initial_handle: Optional[asyncio.TimerHandle] = None
        self.repeat_task: Optional[asyncio.Task] = None
        self.hide_handle: Optional[asyncio.TimerHandle] = None
        self.visible = False
        self.last_count: Optional[int] = None
        self.fired = 0
        self.stopped = False

    def begin(self) -> None:
        loop = asyncio.get_running_loop()
        self.initial_handle = loop.call_later(self.simulator.initial_delay, self.fire)
        self.repeat_task = loop.create_task(self._repeat())

    async def _repeat(self) -> None:
        while True:
            await asyncio.sleep(self.simulator.interval)
            self.fire()

    def fire(self) -> int:
        """Draw a count, show it and schedule its hide."""
        if self.stopped:
            return self.last_count or 0

        count = self.simulator.sampler(self.low, self.high)
        self.last_count = count
        self.fired += 1
        self.visible = True
        self.simulator.on_show(count, viewer_message(count))

        if self.hide_handle is not None:
            self.hide_handle.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # fired synchronously outside a loop; nothing to schedule
            self.hide_handle = None
        else:
            self.hide_handle = loop.call_later(self.simulator.display_duration, self.hide)
        return count

    def hide(self) -> None:
        self.hide_handle = None
        if self.visible:
            self.visible = False
            self.simulator.on_hide()

    def stop(self) -> None:
        """Cancel every pending timer. Safe to call more than once."""
        if self.stopped:
            return
        self.stopped = True
        for handle in (self.initial_handle, self.hide_handle):
            if handle is not None:
                handle.cancel()
        if self.repeat_task is not None and not self.repeat_task.done():
            self.repeat_task.cancel()
        self.initial_handle = None
        self.hide_handle = None
        self.repeat_task = None
        self.hide()


class ViewerCountSimulator:
    """Starts and stops viewer sessions; at most one session is live."""

    def __init__(
        self,
        on_show: Callable[[int, str], None] = _noop_show,
        on_hide: Callable[[], None] = _noop_hide,
        sampler: Sampler = uniform_sampler,
        initial_delay: float = ShowcaseConfig.VIEWER_INITIAL_DELAY_SECONDS,
        interval: float = ShowcaseConfig.VIEWER_INTERVAL_SECONDS,
        display_duration: float = ShowcaseConfig.VIEWER_DISPLAY_SECONDS,
    ):
        if display_duration >= interval:
            raise ValueError("display_duration must be shorter than interval")
        self.on_show = on_show
        self.on_hide = on_hide
        self.sampler = sampler
        self.initial_delay = initial_delay
        self.interval = interval
        self.display_duration = display_duration
        self.session: Optional[ViewerSession] = None

    def start(self, low: int, high: int) -> ViewerSession:
        """Stop the previous session, then schedule a new one. Needs a running loop."""
        self.stop()
        session = ViewerSession(self, low, high)
        session.begin()
        self.session = session
        logger.debug("Viewer simulation started", viewers_min=session.low, viewers_max=session.high)
        return session

    def stop(self) -> None:
        if self.session is not None:
            self.session.stop()
            self.session = None
