# ================================================================================
# Wait Module
# ================================================================================
#
# Bounded explicit waits for UI automation, on top of Playwright's own
# auto-waiting API.
#
# Element states are awaited in the browser through `locator.wait_for`
# ("attached", "visible", "hidden", "detached") and enablement through
# `expect(locator).to_be_enabled`. Both are given the caller's budget; a
# timeout is re-raised as WaitTimeoutError so callers handle one type.
#
# The single fixed delay (`settle`) exists for page settle time after a
# composite action, where no observable state change is available.
#
# Usage:
#   waiter = Waiter()
#   waiter.for_state(page.locator("id=submit"), "visible", timeout=5, description="login button")
#   waiter.settle(2000)
#
# ================================================================================

import time
from typing import Any, Callable

from loguru import logger
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import expect


ELEMENT_STATES = ("attached", "detached", "visible", "hidden")


class WaitTimeoutError(Exception):
    """Raised when an element does not reach a state within its time budget."""
    pass


def to_ms(seconds: float) -> float:
    """Seconds to a Playwright timeout; Playwright treats 0 as "no timeout"."""
    return max(seconds * 1000.0, 1.0)


class Waiter:
    """
    Explicit waits bound to a clock.

    The clock measures elapsed time and remaining budget; `sleep` backs the
    settle delay. Both are injectable so wait budgets can be exercised
    deterministically.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.clock = clock
        self._sleep = sleep

    def for_state(self, locator: Any, state: str, timeout: float, description: str = "element") -> None:
        """
        Wait until `locator` reaches `state`.

        Args:
            locator: Playwright locator (resolving to a single element)
            state: One of "attached", "detached", "visible", "hidden"
            timeout: Budget in seconds
            description: Human-readable description for logging

        Raises:
            WaitTimeoutError: If the state is not reached within the budget
        """
        if state not in ELEMENT_STATES:
            raise ValueError(f"Unknown element state '{state}', expected one of {ELEMENT_STATES}")
        try:
            locator.wait_for(state=state, timeout=to_ms(timeout))
        except PlaywrightTimeoutError as e:
            raise WaitTimeoutError(
                f"Timed out after {timeout}s waiting for {description} to be {state}"
            ) from e
        logger.debug(f"{description} is {state}")

    def for_enabled(self, locator: Any, timeout: float, description: str = "element") -> None:
        """
        Wait until `locator` is enabled.

        Raises:
            WaitTimeoutError: If the element stays disabled for the whole budget
        """
        try:
            expect(locator).to_be_enabled(timeout=to_ms(timeout))
        except AssertionError as e:
            raise WaitTimeoutError(
                f"Timed out after {timeout}s waiting for {description} to be enabled"
            ) from e

    def remaining(self, deadline: float) -> float:
        """Seconds left until `deadline` (never negative)."""
        return max(deadline - self.clock(), 0.0)

    def settle(self, milliseconds: float) -> None:
        """
        Fixed delay for page settle time.

        This is the only unconditional sleep in the framework. Use it where
        there is no observable state to wait for.
        """
        if milliseconds <= 0:
            return
        logger.debug(f"Settle delay: {milliseconds}ms")
        self._sleep(milliseconds / 1000.0)


__all__ = [
    "ELEMENT_STATES",
    "WaitTimeoutError",
    "Waiter",
    "to_ms",
]
