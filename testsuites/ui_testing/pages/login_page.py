"""
================================================================================
Login Page Object
================================================================================

Login page of the practice test site.

Design goals:
  - Locators come from configuration and are resolved once at construction
  - Every action is an ElementActions primitive; no extra waits
  - `login()` applies the single page-settle delay after the composite action

================================================================================
"""

from __future__ import annotations

from typing import Any, Optional

import allure
from loguru import logger

from testsuites.ui_testing.framework.element_actions import ElementActions, InteractionOutcome
from testsuites.ui_testing.framework.page_model import resolve_locators


class LoginPage:
    """Login page object."""

    LOCATOR_NAMES = ("username", "password", "submit", "success", "error")

    def __init__(self, session: Any, config: Any, actions: Optional[ElementActions] = None):
        """
        Args:
            session: Live browser Session
            config: EnvironmentConfig providing URL, waits and locators
            actions: Interaction layer (defaults to one bound to `session`)
        """
        self.session = session
        self.config = config
        self.actions = actions or ElementActions(session, default_timeout=config.explicit_wait)
        self.selectors = resolve_locators(config, self.LOCATOR_NAMES)
        logger.debug("Locators initialized for Login page")

    @allure.step("Open login page")
    def open(self) -> "LoginPage":
        self.session.navigate(self.config.base_url)
        return self

    # =========================================================================
    # Actions
    # =========================================================================

    def enter_username(self, username: str) -> InteractionOutcome:
        return self.actions.type_text(self.selectors["username"], username)

    def enter_password(self, password: str) -> InteractionOutcome:
        return self.actions.type_text(self.selectors["password"], password)

    def click_submit(self) -> InteractionOutcome:
        return self.actions.click(self.selectors["submit"])

    @allure.step("Login (username={username})")
    def login(self, username: str, password: str) -> InteractionOutcome:
        """
        Enter credentials and submit.

        Steps run in order and stop at the first failure, whose outcome is
        returned. After a successful submit the page settle delay applies once.
        """
        for step in (
            lambda: self.enter_username(username),
            lambda: self.enter_password(password),
            self.click_submit,
        ):
            outcome = step()
            if not outcome:
                logger.warning(f"Login aborted at {outcome.action}: {outcome.cause}")
                return outcome

        self.actions.settle(self.config.page_wait_ms)
        logger.info(f"Login performed with username: {username}")
        return outcome

    # =========================================================================
    # Queries
    # =========================================================================

    def get_success_message(self) -> str:
        return self.actions.read_text(self.selectors["success"])

    def get_error_message(self) -> str:
        return self.actions.read_text(self.selectors["error"])

    def is_login_successful(self) -> bool:
        return self.actions.is_displayed(self.selectors["success"])

    def is_error_message_displayed(self) -> bool:
        return self.actions.is_displayed(self.selectors["error"])

    def is_on_login_page(self) -> bool:
        """Both credential fields are in the DOM."""
        return (
            self.actions.is_present(self.selectors["username"])
            and self.actions.is_present(self.selectors["password"])
        )

    def get_page_title(self) -> str:
        return self.session.get_title()

    def get_current_url(self) -> str:
        return self.session.get_current_url()
