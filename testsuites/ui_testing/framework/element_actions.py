# ================================================================================
# Element Actions Module
# ================================================================================
#
# Wait-guarded element interactions for a live browser session.
#
# Every operation takes a typed Selector and an explicit timeout (seconds),
# waits in the browser until its precondition holds, then acts. A condition that
# is not met within the budget is a reportable outcome, never an exception:
#
#   - click / type_text / wait_for_disappearance return an InteractionOutcome
#   - is_displayed / is_present return False
#   - read_text returns EMPTY_TEXT
#
# The calling test decides whether a failed outcome fails the test
# (`outcome.raise_for_failure()` or a plain assert on the outcome).
#
# ================================================================================

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from .locator_resolver import Selector
from .waits import Waiter, WaitTimeoutError, to_ms


# Returned by read_text when the element never became visible
EMPTY_TEXT = ""

# Default wait budget in seconds when neither the call nor the instance sets one
DEFAULT_TIMEOUT = 15.0


class FailureKind(str, Enum):
    """Recoverable interaction failure kinds."""

    NOT_INTERACTABLE = "NotInteractable"
    NOT_VISIBLE = "NotVisible"
    NOT_PRESENT = "NotPresent"
    WAIT_TIMEOUT = "WaitTimeout"


class InteractionError(Exception):
    """Base class for escalated interaction failures."""

    def __init__(self, outcome: "InteractionOutcome"):
        self.outcome = outcome
        super().__init__(f"{outcome.action} on '{outcome.selector}' failed: {outcome.cause}")


class NotInteractable(InteractionError):
    """Element never became clickable, or the click itself was rejected."""
    pass


class NotVisible(InteractionError):
    """Element never became visible."""
    pass


class NotPresent(InteractionError):
    """Element never appeared in the DOM."""
    pass


class WaitTimeout(InteractionError):
    """A state change (e.g. disappearance) did not happen in time."""
    pass


_ERROR_TYPES = {
    FailureKind.NOT_INTERACTABLE: NotInteractable,
    FailureKind.NOT_VISIBLE: NotVisible,
    FailureKind.NOT_PRESENT: NotPresent,
    FailureKind.WAIT_TIMEOUT: WaitTimeout,
}


@dataclass(frozen=True)
class InteractionOutcome:
    """
    Result of one element interaction.

    Truthy on success, so `assert page.actions.click(button)` reads naturally.

    Attributes:
        action: Operation name ("click", "type_text", ...)
        selector: Selector the operation targeted
        failure: Failure kind, None on success
        cause: Human-readable failure cause
        value: Operation result (e.g. text read), if any
        elapsed: Seconds spent, including waiting
    """
    action: str
    selector: Selector
    failure: Optional[FailureKind] = None
    cause: Optional[str] = None
    value: Any = None
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return self.failure is None

    def __bool__(self) -> bool:
        return self.ok

    def raise_for_failure(self) -> "InteractionOutcome":
        """Raise the matching InteractionError if this outcome is a failure."""
        if self.failure is not None:
            raise _ERROR_TYPES[self.failure](self)
        return self


class ElementActions:
    """
    Element interaction layer bound to one browser session.

    The session is used by a single test at a time; operations block the
    calling thread until their condition is met or the budget runs out.

    Example:
        actions = ElementActions(session, default_timeout=15)
        actions.type_text(parse_locator("id:username"), "student")
        assert actions.click(parse_locator("id:submit"))
    """

    def __init__(
        self,
        session: Any,
        default_timeout: float = DEFAULT_TIMEOUT,
        waiter: Optional[Waiter] = None,
    ):
        """
        Initialize ElementActions.

        Args:
            session: Object exposing a Playwright `page` (normally a Session)
            default_timeout: Wait budget in seconds when a call passes None
            waiter: Wait helper with its clock (mainly for tests)
        """
        self.session = session
        self.default_timeout = default_timeout
        self.waiter = waiter or Waiter()

    @property
    def page(self):
        return self.session.page

    # =========================================================================
    # Commands
    # =========================================================================

    @allure.step("Click element: {selector}")
    def click(self, selector: Selector, timeout: Optional[float] = None) -> InteractionOutcome:
        """
        Click an element once it is visible and enabled.

        Playwright's own actionability checks (stable, receives events)
        apply to the click itself within what is left of the budget.
        """
        timeout = self._budget(timeout)
        started = self.waiter.clock()
        deadline = started + timeout
        locator = self._locator(selector)

        try:
            self.waiter.for_state(locator, "visible", timeout, description=str(selector))
            self.waiter.for_enabled(locator, self.waiter.remaining(deadline), description=str(selector))
            locator.click(timeout=to_ms(self.waiter.remaining(deadline)))
        except (WaitTimeoutError, PlaywrightError) as e:
            return self._failed("click", selector, FailureKind.NOT_INTERACTABLE, e, started)

        logger.info(f"Element clicked: {selector}")
        return self._succeeded("click", selector, started)

    @allure.step("Type into element: {selector}")
    def type_text(
        self,
        selector: Selector,
        text: str,
        timeout: Optional[float] = None,
    ) -> InteractionOutcome:
        """
        Clear an input and type `text` into it.

        Clearing and typing form one step: if the clear succeeds but typing
        fails, the outcome is a failure.
        """
        timeout = self._budget(timeout)
        started = self.waiter.clock()
        deadline = started + timeout
        locator = self._locator(selector)

        try:
            self.waiter.for_state(locator, "visible", timeout, description=str(selector))
        except (WaitTimeoutError, PlaywrightError) as e:
            return self._failed("type_text", selector, FailureKind.NOT_VISIBLE, e, started)

        cleared = False
        try:
            locator.clear(timeout=to_ms(self.waiter.remaining(deadline)))
            cleared = True
            locator.fill(text, timeout=to_ms(self.waiter.remaining(deadline)))
        except PlaywrightError as e:
            stage = "cleared but typing failed" if cleared else "clear failed"
            return self._failed("type_text", selector, FailureKind.NOT_VISIBLE, f"{stage}: {e}", started)

        logger.info(f"Text sent to element: {selector}")
        return self._succeeded("type_text", selector, started)

    @allure.step("Wait for element to disappear: {selector}")
    def wait_for_disappearance(
        self,
        selector: Selector,
        timeout: Optional[float] = None,
    ) -> InteractionOutcome:
        """Wait until the element is absent from the DOM or hidden."""
        timeout = self._budget(timeout)
        started = self.waiter.clock()
        locator = self._locator(selector)

        try:
            self.waiter.for_state(locator, "hidden", timeout, description=str(selector))
        except (WaitTimeoutError, PlaywrightError) as e:
            return self._failed("wait_for_disappearance", selector, FailureKind.WAIT_TIMEOUT, e, started)

        logger.debug(f"Element disappeared: {selector}")
        return self._succeeded("wait_for_disappearance", selector, started)

    def settle(self, milliseconds: float) -> None:
        """Fixed page-settle delay. Not a condition wait."""
        self.waiter.settle(milliseconds)

    # =========================================================================
    # Queries
    # =========================================================================

    def read_text_outcome(
        self,
        selector: Selector,
        timeout: Optional[float] = None,
    ) -> InteractionOutcome:
        """Read the rendered text of an element once visible."""
        timeout = self._budget(timeout)
        started = self.waiter.clock()
        deadline = started + timeout
        locator = self._locator(selector)

        try:
            self.waiter.for_state(locator, "visible", timeout, description=str(selector))
            text = locator.inner_text(timeout=to_ms(self.waiter.remaining(deadline)))
        except (WaitTimeoutError, PlaywrightError) as e:
            return self._failed("read_text", selector, FailureKind.NOT_VISIBLE, e, started)

        logger.debug(f"Text retrieved from {selector}: '{text}'")
        return self._succeeded("read_text", selector, started, value=text)

    def read_text(self, selector: Selector, timeout: Optional[float] = None) -> str:
        """
        Rendered text of an element, or EMPTY_TEXT on timeout.

        An element that is missing and one whose text is empty both give
        EMPTY_TEXT; use `is_present` first when the difference matters.
        """
        outcome = self.read_text_outcome(selector, timeout)
        return outcome.value if outcome else EMPTY_TEXT

    def read_all_texts(self, selector: Selector, timeout: Optional[float] = None) -> List[str]:
        """
        Trimmed, non-empty texts of every element matching `selector`.

        Returns an empty list when nothing matches within the budget.
        """
        if not self.is_present(selector, timeout):
            return []
        locator = self.page.locator(selector.to_playwright())
        try:
            texts = locator.all_inner_texts()
        except PlaywrightError as e:
            logger.warning(f"Failed to read texts from {selector}: {e}")
            return []
        return [t.strip() for t in texts if t and t.strip()]

    def is_displayed(self, selector: Selector, timeout: Optional[float] = None) -> bool:
        """True once the element is visible; False if it never is."""
        return self._holds(selector, "visible", timeout)

    def is_present(self, selector: Selector, timeout: Optional[float] = None) -> bool:
        """True once the element is in the DOM (visible or not)."""
        return self._holds(selector, "attached", timeout)

    # =========================================================================
    # Page utilities
    # =========================================================================

    @allure.step("Take screenshot: {name}")
    def take_screenshot(self, name: str, full_page: bool = False) -> bytes:
        """
        Take a screenshot of the page and attach it to the Allure report.

        Args:
            name: Attachment name
            full_page: Whether to capture full scrollable page

        Returns:
            Screenshot as bytes
        """
        screenshot = self.page.screenshot(full_page=full_page)
        allure.attach(
            screenshot,
            name=name,
            attachment_type=allure.attachment_type.PNG
        )
        return screenshot

    # =========================================================================
    # Internals
    # =========================================================================

    def _locator(self, selector: Selector):
        return self.page.locator(selector.to_playwright()).first

    def _budget(self, timeout: Optional[float]) -> float:
        return self.default_timeout if timeout is None else timeout

    def _holds(self, selector: Selector, state: str, timeout: Optional[float]) -> bool:
        timeout = self._budget(timeout)
        try:
            self.waiter.for_state(self._locator(selector), state, timeout, description=str(selector))
            return True
        except WaitTimeoutError:
            logger.debug(f"Element not {state} within {timeout}s: {selector}")
            return False
        except PlaywrightError as e:
            logger.warning(f"Could not check whether {selector} is {state}: {e}")
            return False

    def _succeeded(
        self,
        action: str,
        selector: Selector,
        started: float,
        value: Any = None,
    ) -> InteractionOutcome:
        return InteractionOutcome(
            action=action,
            selector=selector,
            value=value,
            elapsed=self.waiter.clock() - started,
        )

    def _failed(
        self,
        action: str,
        selector: Selector,
        kind: FailureKind,
        cause: Any,
        started: float,
    ) -> InteractionOutcome:
        outcome = InteractionOutcome(
            action=action,
            selector=selector,
            failure=kind,
            cause=str(cause),
            elapsed=self.waiter.clock() - started,
        )
        logger.warning(f"{action} failed [{kind.value}] for {selector}: {outcome.cause}")
        return outcome


__all__ = [
    "EMPTY_TEXT",
    "FailureKind",
    "InteractionError",
    "NotInteractable",
    "NotVisible",
    "NotPresent",
    "WaitTimeout",
    "InteractionOutcome",
    "ElementActions",
]
