"""
================================================================================
Locator Resolver
================================================================================

Parses the compact ``strategy:value`` locator grammar used in configuration
into typed, strategy-tagged selectors.

Supported strategies (case-insensitive):
    id, name, classname, tagname, css | cssselector, xpath,
    linktext, partiallinktext

Examples:
    "id:username"                   -> Selector(ID, "username")
    "className:post-title"          -> Selector(CLASS_NAME, "post-title")
    "xpath://button[@id='submit']"  -> Selector(XPATH, "//button[@id='submit']")

The string is split on the FIRST colon only, so XPath and CSS values may
contain colons themselves.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class LocatorError(ValueError):
    """Base class for locator configuration errors."""
    pass


class InvalidLocatorFormat(LocatorError):
    """Raised when a locator string is empty or not of the form ``strategy:value``."""
    pass


class UnsupportedStrategy(LocatorError):
    """Raised when the strategy token is not a recognized locator strategy."""
    pass


class LocatorStrategy(str, Enum):
    """Element location strategies."""

    ID = "id"
    NAME = "name"
    CLASS_NAME = "classname"
    TAG_NAME = "tagname"
    CSS = "css"
    XPATH = "xpath"
    LINK_TEXT = "linktext"
    PARTIAL_LINK_TEXT = "partiallinktext"


# Strategy tokens accepted in locator strings (already lower-cased)
STRATEGY_TOKENS: Dict[str, LocatorStrategy] = {
    "id": LocatorStrategy.ID,
    "name": LocatorStrategy.NAME,
    "classname": LocatorStrategy.CLASS_NAME,
    "tagname": LocatorStrategy.TAG_NAME,
    "css": LocatorStrategy.CSS,
    "cssselector": LocatorStrategy.CSS,
    "xpath": LocatorStrategy.XPATH,
    "linktext": LocatorStrategy.LINK_TEXT,
    "partiallinktext": LocatorStrategy.PARTIAL_LINK_TEXT,
}


@dataclass(frozen=True)
class Selector:
    """
    Immutable reference to a UI element.

    Attributes:
        strategy: How the element is located
        value: Strategy-specific expression (never empty)
    """
    strategy: LocatorStrategy
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.strategy, LocatorStrategy):
            raise UnsupportedStrategy(f"Unsupported locator strategy: {self.strategy!r}")
        if not isinstance(self.value, str) or not self.value.strip():
            raise InvalidLocatorFormat(
                f"Locator value cannot be empty for strategy '{self.strategy.value}'"
            )

    def to_playwright(self) -> str:
        """
        Convert to a Playwright selector string.

        Returns:
            Selector string accepted by ``page.locator()``
        """
        quoted = json.dumps(self.value)

        if self.strategy is LocatorStrategy.ID:
            return f"id={self.value}"
        if self.strategy is LocatorStrategy.NAME:
            return f"css=[name={quoted}]"
        if self.strategy is LocatorStrategy.CLASS_NAME:
            return f"css=[class~={quoted}]"
        if self.strategy in (LocatorStrategy.TAG_NAME, LocatorStrategy.CSS):
            return f"css={self.value}"
        if self.strategy is LocatorStrategy.XPATH:
            return f"xpath={self.value}"
        if self.strategy is LocatorStrategy.LINK_TEXT:
            return f"css=a:text-is({quoted})"
        return f"css=a:has-text({quoted})"

    def __str__(self) -> str:
        return f"{self.strategy.value}:{self.value}"


def parse_locator(locator_string: Any) -> Selector:
    """
    Parse a ``strategy:value`` string into a Selector.

    Args:
        locator_string: Locator in the form "strategy:value"

    Returns:
        Selector tagged with the parsed strategy

    Raises:
        InvalidLocatorFormat: Empty/None input, missing colon, or an empty
            strategy or value after trimming
        UnsupportedStrategy: Strategy token not in STRATEGY_TOKENS
    """
    if not isinstance(locator_string, str) or not locator_string.strip():
        raise InvalidLocatorFormat("Locator string cannot be null or empty")

    token, sep, value = locator_string.partition(":")
    if not sep:
        raise InvalidLocatorFormat(
            f"Invalid locator format. Expected 'type:value'. Got: {locator_string!r}"
        )

    token = token.strip().lower()
    value = value.strip()
    if not token or not value:
        raise InvalidLocatorFormat(
            f"Invalid locator format. Expected 'type:value'. Got: {locator_string!r}"
        )

    strategy = STRATEGY_TOKENS.get(token)
    if strategy is None:
        raise UnsupportedStrategy(f"Unsupported locator type: {token}")

    return Selector(strategy=strategy, value=value)


__all__ = [
    "LocatorError",
    "InvalidLocatorFormat",
    "UnsupportedStrategy",
    "LocatorStrategy",
    "Selector",
    "parse_locator",
    "STRATEGY_TOKENS",
]
