"""
Status Poller - bounded-time wait on a remote resource's status.

The poller repeatedly awaits a ``refresh`` coroutine and drives a small state
machine::

    PENDING --target seen `stability` times in a row--> TARGET
    PENDING --status outside pending/target--------------> FAILED
    PENDING --deadline elapsed---------------------------> TIMED_OUT

``sleep`` and ``clock`` are injectable so tests can script statuses without
waiting on the wall clock. Cancelling the awaiting task interrupts the current
sleep or read immediately.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Collection
from dataclasses import dataclass
from enum import Enum

from .errors import ApiError, ProvisioningError, WaitTimeoutError
from .settings import PropelSettings, get_settings

logger = logging.getLogger(__name__)

StatusRefresh = Callable[[], Awaitable[str]]
Refresh = Callable[[], Awaitable[object]]


class PollState(str, Enum):
    PENDING = "pending"
    TARGET = "target"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass
class PollResult:
    state: PollState
    status: str | None
    reads: int


def _format_duration(seconds: float) -> str:
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}m{secs}s"


class StatusPoller:
    """Polls a remote status until it settles, fails or times out.

    Args:
        delay: Seconds to wait before the first read
        interval: Seconds between reads
        min_interval: Lower bound applied to ``interval``
        stability: Consecutive target observations required
        sleep: Awaitable sleep, ``asyncio.sleep`` by default
        clock: Monotonic clock in seconds, ``time.monotonic`` by default
    """

    def __init__(
        self,
        delay: float = 10.0,
        interval: float = 10.0,
        min_interval: float = 5.0,
        stability: int = 3,
        sleep: Callable[[float], Awaitable[None]] | None = None,
        clock: Callable[[], float] | None = None,
    ):
        if stability < 1:
            raise ValueError("stability must be at least 1")
        self.delay = max(delay, 0.0)
        self.interval = max(interval, min_interval)
        self.stability = stability
        self._sleep = sleep or asyncio.sleep
        self._clock = clock or time.monotonic

    @classmethod
    def from_settings(cls, settings: PropelSettings | None = None) -> "StatusPoller":
        settings = settings or get_settings()
        return cls(
            delay=settings.poll_delay,
            interval=settings.poll_interval,
            min_interval=settings.poll_min_interval,
            stability=settings.poll_stability,
        )

    async def wait_for_status(
        self,
        refresh: StatusRefresh,
        pending: Collection[str],
        target: Collection[str],
        timeout: float,
        describe: str = "resource",
    ) -> PollResult:
        """
        Wait until ``refresh`` reports a target status ``stability`` times in a row.

        Args:
            refresh: Coroutine function returning the current status
            pending: Statuses that mean "keep waiting"
            target: Statuses that mean "done"
            timeout: Deadline in seconds, measured from the call
            describe: Resource description used in error messages

        Returns:
            PollResult in the TARGET state

        Raises:
            ProvisioningError: A status outside pending and target was observed
            WaitTimeoutError: The deadline elapsed first
            ApiError: A read failed
        """
        wanted = ", ".join(sorted(target))
        summary = f"error waiting for {describe} to be {wanted}"
        start = self._clock()
        last_status: str | None = None
        observed = 0
        reads = 0

        await self._sleep(min(self.delay, max(timeout, 0.0)))

        while True:
            if self._clock() - start > timeout:
                logger.debug(f"{describe}: {PollState.TIMED_OUT.value} after {reads} reads")
                raise WaitTimeoutError(
                    summary,
                    f"timeout while waiting for state to become '{wanted}' "
                    f"(last state: '{last_status}', timeout: {_format_duration(timeout)})",
                    last_status,
                )

            status = await refresh()
            reads += 1
            if status != last_status:
                logger.debug(f"{describe}: status {last_status} -> {status}")
            last_status = status

            if status in target:
                observed += 1
                if observed >= self.stability:
                    logger.info(f"{describe} reached {status} after {reads} reads")
                    return PollResult(state=PollState.TARGET, status=status, reads=reads)
            elif status in pending:
                observed = 0
            else:
                logger.debug(f"{describe}: {PollState.FAILED.value} on status {status}")
                raise ProvisioningError(summary, status)

            await self._sleep(self.interval)

    async def wait_for_absence(
        self,
        refresh: Refresh,
        timeout: float,
        describe: str = "resource",
    ) -> PollResult:
        """
        Wait until ``refresh`` fails with a "not found" error.

        Args:
            refresh: Coroutine function reading the resource
            timeout: Deadline in seconds, measured from the call
            describe: Resource description used in error messages

        Returns:
            PollResult in the TARGET state

        Raises:
            WaitTimeoutError: The resource was still present at the deadline
            ApiError: A read failed for any reason other than "not found"
        """
        start = self._clock()
        reads = 0

        await self._sleep(min(self.interval, max(timeout, 0.0)))

        while True:
            if self._clock() - start > timeout:
                raise WaitTimeoutError(
                    f"error waiting for {describe} to be deleted",
                    f"still present after {reads} reads "
                    f"(timeout: {_format_duration(timeout)})",
                )

            try:
                await refresh()
            except ApiError as e:
                reads += 1
                if e.is_not_found:
                    logger.info(f"{describe} confirmed deleted after {reads} reads")
                    return PollResult(state=PollState.TARGET, status=None, reads=reads)
                raise
            reads += 1
            await self._sleep(self.interval)
