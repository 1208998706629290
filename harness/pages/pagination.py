"""Waiting for an entity to show up in an incrementally paginated list.

After an invoice is created through the API the UI may not list it yet: the
row can be delayed by rendering, or sit on a page that has not been revealed
through "Load more". ListAppearanceWaiter polls until the entity is present,
advancing pagination at most once per poll, and gives up at a deadline.

The waiter only knows two coroutines, a presence check and a page advancer,
so the algorithm runs the same against a browser page or a test double.
"""

import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, Tuple, Type

from playwright.async_api import Error as PlaywrightError

from harness.core.logging import get_logger
from harness.pages.constants import DEFAULT_WAIT_TIMEOUT, POLL_INTERVAL

logger = get_logger(__name__)

PresenceCheck = Callable[[], Awaitable[bool]]
PageAdvancer = Callable[[], Awaitable[bool]]


class WaitResult(str, Enum):
    """How a wait ended."""
    FOUND = "found"
    NOT_FOUND = "not_found"  # still absent when the deadline passed
    TRANSPORT_ERROR = "transport_error"  # the page could not be queried


@dataclass
class WaitOutcome:
    """Result of ListAppearanceWaiter.wait().

    Truthy only when the entity was found, so it can be asserted directly.

    Attributes:
        result: How the wait ended
        polls: Presence checks made inside the loop
        load_more_clicks: Successful pagination advances
        elapsed: Seconds spent waiting
        error: The exception behind a TRANSPORT_ERROR result
    """
    result: WaitResult
    polls: int = 0
    load_more_clicks: int = 0
    elapsed: float = 0.0
    error: Optional[BaseException] = None

    def __bool__(self) -> bool:
        return self.result is WaitResult.FOUND

    @property
    def found(self) -> bool:
        return self.result is WaitResult.FOUND

    @property
    def timed_out(self) -> bool:
        return self.result is WaitResult.NOT_FOUND


class ListAppearanceWaiter:
    """Poll a paginated list until an entity appears or a deadline passes.

    Each cycle:
    1. return FOUND if the presence check sees the entity;
    2. otherwise call the advancer once (it clicks "Load more" when the
       control is available and reports whether it did);
    3. sleep for the poll interval.

    After the deadline one final check decides between FOUND and NOT_FOUND.
    Exceptions of ``transport_errors`` raised by the presence check or the advancer end
    the wait with TRANSPORT_ERROR. If the control keeps appearing and
    disappearing the loop still ends at the deadline; that race is not
    reported separately.
    """

    def __init__(
        self,
        is_present: PresenceCheck,
        advance: PageAdvancer,
        timeout: float = DEFAULT_WAIT_TIMEOUT,
        poll_interval: float = POLL_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        transport_errors: Tuple[Type[BaseException], ...] = (PlaywrightError,),
    ):
        """Initialize the waiter.

        Args:
            is_present: Coroutine returning True once the entity is rendered
            advance: Coroutine revealing the next page; returns True if it did
            timeout: Seconds before giving up
            poll_interval: Seconds between presence checks
            clock: Monotonic clock in seconds
            sleep: Coroutine used between polls
            transport_errors: Exception types meaning the page is unreachable
        """
        if timeout < 0:
            raise ValueError("timeout must be non-negative")
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")

        self._is_present = is_present
        self._advance = advance
        self.timeout = timeout
        self.poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep
        self._transport_errors = transport_errors

    async def wait(self) -> WaitOutcome:
        """Run the polling loop. Never raises for transport errors."""
        start = self._clock()
        deadline = start + self.timeout
        outcome = WaitOutcome(result=WaitResult.NOT_FOUND)

        try:
            while self._clock() < deadline:
                outcome.polls += 1
                if await self._is_present():
                    outcome.result = WaitResult.FOUND
                    return outcome

                if await self._advance():
                    outcome.load_more_clicks += 1
                    logger.debug(f"Revealed another page (click {outcome.load_more_clicks})")

                await self._sleep(self.poll_interval)

            if await self._is_present():
                outcome.result = WaitResult.FOUND
            else:
                logger.warning(
                    f"Entity not visible after {self.timeout}s "
                    f"({outcome.polls} polls, {outcome.load_more_clicks} load-more clicks)"
                )
        except self._transport_errors as e:
            logger.warning(f"Page became unreachable while waiting: {e}")
            outcome.result = WaitResult.TRANSPORT_ERROR
            outcome.error = e
        finally:
            outcome.elapsed = self._clock() - start

        return outcome
