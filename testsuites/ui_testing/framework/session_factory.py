"""
================================================================================
Session Factory
================================================================================

Browser session creation for UI automation.

Features:
    - Browser family selection (Chrome, Firefox, Edge)
    - Lenient family parsing: unknown names fall back to Chrome with a warning
    - Per-family launch presets
    - Idempotent session teardown

Each Session owns its own Playwright driver instance, so sessions created on
different threads never share driver state.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright


class SessionStartError(Exception):
    """Raised when a browser session cannot be launched."""
    pass


class SessionClosedError(Exception):
    """Raised when a quit session is used."""
    pass


class BrowserFamily(str, Enum):
    """Supported browser families."""

    CHROME = "chrome"
    FIREFOX = "firefox"
    EDGE = "edge"

    @classmethod
    def from_name(cls, name: Union[str, "BrowserFamily", None]) -> "BrowserFamily":
        """
        Resolve a browser family from its name.

        Unknown or empty names resolve to CHROME with a warning.
        """
        if isinstance(name, BrowserFamily):
            return name
        normalized = (name or "").strip().lower()
        for family in cls:
            if family.value == normalized:
                return family
        logger.warning(f"Browser not supported: {name!r}. Using {DEFAULT_FAMILY.value} as default.")
        return DEFAULT_FAMILY


DEFAULT_FAMILY = BrowserFamily.CHROME


@dataclass
class SessionOptions:
    """
    Session launch options.

    Attributes:
        headless: Run browser without a visible window
        viewport: Window size used by `maximize()`
        implicit_wait: Default timeout (seconds) for raw page operations
        extra_args: Additional browser command-line arguments
        ignore_https_errors: Accept self-signed certificates
    """
    headless: bool = True
    viewport: Dict[str, int] = field(default_factory=lambda: {"width": 1920, "height": 1080})
    implicit_wait: Optional[float] = None
    extra_args: List[str] = field(default_factory=list)
    ignore_https_errors: bool = True


class Session:
    """
    Live handle to one browser instance, used by one test at a time.

    Exposes navigation, window and timeout control plus teardown. The
    Playwright page is available as `page` for the interaction layer.
    """

    def __init__(
        self,
        family: BrowserFamily,
        page: Any,
        context: Any = None,
        browser: Any = None,
        playwright: Any = None,
        viewport: Optional[Dict[str, int]] = None,
    ):
        self.family = family
        self._page = page
        self._context = context
        self._browser = browser
        self._playwright = playwright
        self._viewport = viewport or {"width": 1920, "height": 1080}
        self.implicit_wait: Optional[float] = None
        self._quit = False

    @property
    def page(self):
        if self._quit:
            raise SessionClosedError(f"{self.family.value} session has already been quit")
        return self._page

    @property
    def is_active(self) -> bool:
        return not self._quit

    def navigate(self, url: str, wait_until: str = "load") -> None:
        """
        Navigate to `url`.

        Args:
            url: Absolute URL
            wait_until: Playwright load state - 'load', 'domcontentloaded', 'networkidle'
        """
        self.page.goto(url, wait_until=wait_until)
        logger.info(f"Navigated to: {url}")

    def maximize(self) -> None:
        """Resize the viewport to the configured full-window size."""
        self.page.set_viewport_size(self._viewport)
        logger.debug(f"Viewport maximized: {self._viewport['width']}x{self._viewport['height']}")

    def set_implicit_wait(self, seconds: float) -> None:
        """Default timeout for raw page operations not guarded by explicit waits."""
        self.implicit_wait = seconds
        self.page.set_default_timeout(seconds * 1000.0)

    def get_title(self) -> str:
        return self.page.title()

    def get_current_url(self) -> str:
        return self.page.url

    def close(self) -> None:
        """Close the current window only; the session stays alive."""
        if self._quit:
            return
        try:
            self._page.close()
            logger.debug("Current window closed")
        except PlaywrightError as e:
            logger.warning(f"Failed to close window: {e}")

    def quit(self) -> None:
        """
        End the session and release the browser.

        Calling quit on an already quit session is a no-op.
        """
        if self._quit:
            return
        self._quit = True

        for name, resource in (("context", self._context), ("browser", self._browser)):
            if resource is None:
                continue
            try:
                resource.close()
            except PlaywrightError as e:
                logger.warning(f"Failed to close {name}: {e}")

        if self._playwright is not None:
            try:
                self._playwright.stop()
            except PlaywrightError as e:
                logger.warning(f"Failed to stop Playwright: {e}")

        logger.info(f"Browser closed: {self.family.value}")

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.quit()


class SessionFactory:
    """
    Creates configured browser sessions.

    Usage:
        factory = SessionFactory()
        with factory.create_session("firefox", SessionOptions(headless=False)) as session:
            session.navigate("https://example.com")
    """

    # Browser launch presets per family
    LAUNCH_PRESETS: Dict[BrowserFamily, Dict[str, Any]] = {
        BrowserFamily.CHROME: {
            "engine": "chromium",
            "args": ["--disable-notifications", "--disable-popup-blocking"],
        },
        BrowserFamily.FIREFOX: {
            "engine": "firefox",
            "args": [],
        },
        BrowserFamily.EDGE: {
            "engine": "chromium",
            "channel": "msedge",
            "args": ["--disable-notifications", "--disable-popup-blocking"],
        },
    }

    def __init__(self, driver_starter: Optional[Callable[[], Any]] = None):
        """
        Initialize session factory.

        Args:
            driver_starter: Returns a started Playwright driver. Defaults to
                `sync_playwright().start`.
        """
        self._driver_starter = driver_starter or (lambda: sync_playwright().start())

    def create_session(
        self,
        family: Union[str, BrowserFamily, None],
        options: Optional[SessionOptions] = None,
    ) -> Session:
        """
        Launch a browser and open a page.

        Args:
            family: Browser family or its name (unknown names fall back to Chrome)
            options: Launch options

        Returns:
            New Session

        Raises:
            SessionStartError: If the browser cannot be launched
        """
        family = BrowserFamily.from_name(family)
        options = options or SessionOptions()
        preset = self.LAUNCH_PRESETS[family]

        launch_options: Dict[str, Any] = {
            "headless": options.headless,
            "args": [*preset["args"], *options.extra_args],
        }
        if "channel" in preset:
            launch_options["channel"] = preset["channel"]

        playwright = self._driver_starter()
        try:
            launcher = getattr(playwright, preset["engine"])
            browser = launcher.launch(**launch_options)
            context = browser.new_context(
                viewport=options.viewport,
                ignore_https_errors=options.ignore_https_errors,
            )
            page = context.new_page()
        except PlaywrightError as e:
            playwright.stop()
            raise SessionStartError(f"Failed to start {family.value} session: {e}") from e

        session = Session(
            family=family,
            page=page,
            context=context,
            browser=browser,
            playwright=playwright,
            viewport=options.viewport,
        )
        if options.implicit_wait is not None:
            session.set_implicit_wait(options.implicit_wait)

        logger.info(f"{family.value.capitalize()} browser initialized (headless={options.headless})")
        return session


__all__ = [
    "BrowserFamily",
    "DEFAULT_FAMILY",
    "SessionOptions",
    "Session",
    "SessionFactory",
    "SessionStartError",
    "SessionClosedError",
]
