"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation core.

Components:
    - locator_resolver: "strategy:value" strings to typed Selectors
    - element_actions: Wait-guarded interactions returning explicit outcomes
    - waits: Bounded Playwright element-state waits and the page-settle delay
    - session_factory: Browser session creation and teardown
    - page_model: Page object composition contract
    - env_config: Per-environment YAML configuration

Author: Automation Team
License: MIT
================================================================================
"""

from .locator_resolver import (
    InvalidLocatorFormat,
    LocatorError,
    LocatorStrategy,
    Selector,
    UnsupportedStrategy,
    parse_locator,
)
from .element_actions import (
    EMPTY_TEXT,
    ElementActions,
    FailureKind,
    InteractionError,
    InteractionOutcome,
)
from .waits import Waiter, WaitTimeoutError
from .session_factory import (
    BrowserFamily,
    Session,
    SessionClosedError,
    SessionFactory,
    SessionOptions,
    SessionStartError,
)
from .page_model import PageModel, resolve_locators
from .env_config import ConfigurationError, Credentials, EnvironmentConfig

__all__ = [
    "InvalidLocatorFormat",
    "LocatorError",
    "LocatorStrategy",
    "Selector",
    "UnsupportedStrategy",
    "parse_locator",
    "EMPTY_TEXT",
    "ElementActions",
    "FailureKind",
    "InteractionError",
    "InteractionOutcome",
    "Waiter",
    "WaitTimeoutError",
    "BrowserFamily",
    "Session",
    "SessionClosedError",
    "SessionFactory",
    "SessionOptions",
    "SessionStartError",
    "PageModel",
    "resolve_locators",
    "ConfigurationError",
    "Credentials",
    "EnvironmentConfig",
]
