"""
In-memory stand-ins for the Playwright page/locator API and a fake clock.

Element state is a function of fake time, so wait semantics can be checked
deterministically: an element created with `visible_at=2.0` becomes visible
two fake seconds after it was created. `wait_for` advances the clock to the
moment the requested state holds, or by the whole timeout before raising
Playwright's TimeoutError, the way a real in-browser wait would.
"""

import math
from typing import Dict, List, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError


# Playwright's default action timeout, in milliseconds
DEFAULT_TIMEOUT_MS = 30000.0


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        """Time passing inside the browser (not a sleep on the test thread)."""
        self.now += seconds


class FakeElement:
    """
    Timed element.

    Args:
        present_at: Seconds until the element is attached (inf = never)
        visible_at: Seconds until it is visible (None = never)
        removed_at: Seconds until it is detached again (None = never)
        enabled: Whether `expect(...).to_be_enabled()` passes
        fail_on: Actions that raise a Playwright error ("click", "clear", "fill")
    """

    def __init__(
        self,
        clock: FakeClock,
        name: str = "element",
        present_at: float = 0.0,
        visible_at: Optional[float] = 0.0,
        removed_at: Optional[float] = None,
        enabled: bool = True,
        text: str = "",
        texts: Optional[List[str]] = None,
        fail_on: tuple = (),
        events: Optional[list] = None,
    ):
        self._clock = clock
        self._created = clock.now
        self.name = name
        self.present_at = present_at
        self.visible_at = visible_at
        self.removed_at = removed_at
        self.enabled = enabled
        self.text = text
        self.texts = texts if texts is not None else [text]
        self.fail_on = fail_on
        self.events = events if events is not None else []
        self.value = "prefilled"
        self.waited_states: List[str] = []

    @property
    def first(self) -> "FakeElement":
        return self

    def _age(self) -> float:
        return self._clock.now - self._created

    def _in_state(self, state: str, age: float) -> bool:
        attached = age >= self.present_at and (self.removed_at is None or age < self.removed_at)
        visible = attached and self.visible_at is not None and age >= self.visible_at
        return {
            "attached": attached,
            "detached": not attached,
            "visible": visible,
            "hidden": not visible,
        }[state]

    def count(self) -> int:
        return 1 if self._in_state("attached", self._age()) else 0

    def is_visible(self) -> bool:
        return self._in_state("visible", self._age())

    def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        self.waited_states.append(state)
        age = self._age()
        budget = (timeout or DEFAULT_TIMEOUT_MS) / 1000.0
        changes = (self.present_at, self.visible_at, self.removed_at)
        candidates = sorted({age} | {t for t in changes if t is not None and age < t <= age + budget})
        for candidate in candidates:
            if self._in_state(state, candidate):
                self._clock.advance(candidate - age)
                return
        self._clock.advance(budget)
        raise PlaywrightTimeoutError(f"Locator.wait_for: Timeout {timeout}ms exceeded waiting for {state}")

    def _act(self, action: str) -> None:
        if action in self.fail_on:
            raise PlaywrightError(f"{action} intercepted on {self.name}")
        self.events.append((self.name, action))

    def click(self, timeout: Optional[float] = None) -> None:
        self._act("click")

    def clear(self, timeout: Optional[float] = None) -> None:
        self._act("clear")
        self.value = ""

    def fill(self, text: str, timeout: Optional[float] = None) -> None:
        self._act("fill")
        self.value = text

    def inner_text(self, timeout: Optional[float] = None) -> str:
        return self.text

    def all_inner_texts(self) -> List[str]:
        return list(self.texts) if self.count() else []


class FakeExpectation:
    """Subset of Playwright's LocatorAssertions used by the framework."""

    def __init__(self, element: FakeElement):
        self.element = element

    def to_be_enabled(self, timeout: Optional[float] = None) -> None:
        if self.element.enabled:
            return
        self.element._clock.advance((timeout or 5000.0) / 1000.0)
        raise AssertionError(f"Locator expected to be enabled\nActual value: disabled\nLocator: {self.element.name}")


def fake_expect(element: FakeElement) -> FakeExpectation:
    return FakeExpectation(element)


class FakePage:
    """Page holding FakeElements keyed by Playwright selector string."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.elements: Dict[str, FakeElement] = {}
        self.events: list = []
        self.url = "about:blank"
        self.title_text = "Test Login | Practice Test Automation"
        self.viewport = None
        self.default_timeout = None
        self.closed = False

    def add(self, selector: str, **kwargs) -> FakeElement:
        element = FakeElement(self.clock, name=selector, events=self.events, **kwargs)
        self.elements[selector] = element
        return element

    def locator(self, selector: str) -> FakeElement:
        if selector not in self.elements:
            return FakeElement(self.clock, name=selector, present_at=math.inf, events=self.events)
        return self.elements[selector]

    def goto(self, url: str, wait_until: str = "load") -> None:
        self.events.append(("page", f"goto {url}"))
        self.url = url

    def title(self) -> str:
        return self.title_text

    def set_viewport_size(self, viewport) -> None:
        self.viewport = viewport

    def set_default_timeout(self, timeout: float) -> None:
        self.default_timeout = timeout

    def screenshot(self, full_page: bool = False) -> bytes:
        return b"\x89PNG fake"

    def close(self) -> None:
        self.closed = True

