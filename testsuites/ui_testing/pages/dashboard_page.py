"""
================================================================================
Dashboard Page Object
================================================================================

Page shown after a successful login.

Highlights:
  - Primary menu read through a single configured locator (`menu_items`)
  - Menu checks compare trimmed, non-empty link texts

================================================================================
"""

from __future__ import annotations

from typing import Any, List, Optional

import allure
from loguru import logger

from testsuites.ui_testing.framework.element_actions import ElementActions
from testsuites.ui_testing.framework.page_model import resolve_locators


class DashboardPage:
    """Dashboard page object."""

    LOCATOR_NAMES = ("menu_items",)

    def __init__(self, session: Any, config: Any, actions: Optional[ElementActions] = None):
        self.session = session
        self.config = config
        self.actions = actions or ElementActions(session, default_timeout=config.explicit_wait)
        self.selectors = resolve_locators(config, self.LOCATOR_NAMES)

    @allure.step("Read dashboard menu")
    def get_menu_list(self) -> List[str]:
        """Texts of all primary menu links, in page order."""
        menus = self.actions.read_all_texts(self.selectors["menu_items"])
        for menu in menus:
            logger.debug(f"Menu found: {menu}")
        return menus

    def is_menu_present(self, menu_name: str) -> bool:
        return menu_name in self.get_menu_list()
