"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for browser sessions and page objects.

Key Features:
- One browser session per test (sessions are never shared)
- Page Object fixtures built from the environment configuration
- Screenshot capture on failure
- Tests are skipped when no browser can be launched

================================================================================
"""

from typing import Generator

import allure
import pytest
from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from testsuites.ui_testing.framework.env_config import EnvironmentConfig
from testsuites.ui_testing.framework.session_factory import (
    Session,
    SessionFactory,
    SessionOptions,
    SessionStartError,
)
from testsuites.ui_testing.pages.dashboard_page import DashboardPage
from testsuites.ui_testing.pages.login_page import LoginPage


# ================================================================================
# Session Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def session_factory() -> SessionFactory:
    return SessionFactory()


@pytest.fixture(scope="session")
def session_options(pytestconfig, env_config: EnvironmentConfig) -> SessionOptions:
    """Launch options from configuration and command line."""
    return SessionOptions(
        headless=env_config.headless and not pytestconfig.getoption("--ui-headed"),
        implicit_wait=env_config.implicit_wait,
    )


@pytest.fixture(scope="function")
def browser_session(
    pytestconfig,
    env_config: EnvironmentConfig,
    session_factory: SessionFactory,
    session_options: SessionOptions,
) -> Generator[Session, None, None]:
    """
    Function-scoped browser session.

    Navigates to the environment's base URL before yielding.
    """
    browser = pytestconfig.getoption("--ui-browser") or env_config.browser
    try:
        session = session_factory.create_session(browser, session_options)
    except SessionStartError as e:
        pytest.skip(f"Browser unavailable: {e}")

    try:
        session.maximize()
        session.navigate(env_config.base_url)
        yield session
    finally:
        session.quit()


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def login_page(browser_session: Session, env_config: EnvironmentConfig) -> LoginPage:
    return LoginPage(browser_session, env_config)


@pytest.fixture
def dashboard_page(browser_session: Session, env_config: EnvironmentConfig) -> DashboardPage:
    return DashboardPage(browser_session, env_config)


@pytest.fixture
def logged_in_session(
    browser_session: Session,
    login_page: LoginPage,
    env_config: EnvironmentConfig,
) -> Session:
    """
    Session logged in with the valid credentials.

    Fails the test if the login itself cannot be performed.
    """
    credentials = env_config.valid_credentials
    login_page.login(credentials.username, credentials.password).raise_for_failure()
    assert login_page.is_login_successful(), "Login failed - success page not displayed"
    return browser_session


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Capture a screenshot when a UI test fails and attach it to Allure.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when != "call" or not report.failed:
        return

    session = getattr(item, "funcargs", {}).get("browser_session")
    if session is None or not session.is_active:
        return

    try:
        allure.attach(
            session.page.screenshot(full_page=True),
            name="failure_screenshot",
            attachment_type=allure.attachment_type.PNG,
        )
    except PlaywrightError as e:
        logger.warning(f"Failed to capture screenshot on failure: {e}")
