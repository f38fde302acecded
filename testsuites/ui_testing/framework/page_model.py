"""
================================================================================
Page Model
================================================================================

Composition contract for page objects.

A page model holds an ElementActions capability and a mapping of logical
field names to Selectors. The mapping is resolved once, when the page is
constructed: a malformed configured locator aborts construction with the
LocatorError raised by `parse_locator`.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Protocol, Tuple, runtime_checkable

from loguru import logger

from .element_actions import ElementActions
from .locator_resolver import InvalidLocatorFormat, Selector, parse_locator


@runtime_checkable
class PageModel(Protocol):
    """Capabilities every page object exposes."""

    LOCATOR_NAMES: Tuple[str, ...]
    actions: ElementActions
    selectors: Mapping[str, Selector]


def resolve_locators(config: Any, names: Iterable[str]) -> Dict[str, Selector]:
    """
    Resolve named locators from configuration.

    Args:
        config: Object with `locator(name) -> Optional[str]` (EnvironmentConfig)
        names: Logical field names the page needs

    Returns:
        Mapping of name to Selector

    Raises:
        InvalidLocatorFormat: A name has no configured locator
        UnsupportedStrategy: A configured locator uses an unknown strategy
    """
    selectors: Dict[str, Selector] = {}
    for name in names:
        raw = config.locator(name)
        if raw is None:
            raise InvalidLocatorFormat(f"No locator configured for '{name}'")
        selectors[name] = parse_locator(raw)
        logger.debug(f"Locator resolved: {name} -> {selectors[name]}")
    return selectors


__all__ = [
    "PageModel",
    "resolve_locators",
]
