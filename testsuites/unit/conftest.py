"""Fixtures wiring the in-memory fakes into the framework objects."""

import pytest
import yaml

from testsuites.ui_testing.framework import waits
from testsuites.ui_testing.framework.element_actions import ElementActions
from testsuites.ui_testing.framework.env_config import EnvironmentConfig
from testsuites.ui_testing.framework.session_factory import BrowserFamily, Session
from testsuites.ui_testing.framework.waits import Waiter
from testsuites.unit.fakes import FakeClock, FakePage, fake_expect


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def waiter(clock, monkeypatch) -> Waiter:
    # Playwright's expect() only accepts real Locators
    monkeypatch.setattr(waits, "expect", fake_expect)
    return Waiter(clock=clock, sleep=clock.sleep)


@pytest.fixture
def fake_page(clock) -> FakePage:
    return FakePage(clock)


@pytest.fixture
def session(fake_page) -> Session:
    return Session(BrowserFamily.CHROME, fake_page)


@pytest.fixture
def actions(session, waiter) -> ElementActions:
    return ElementActions(session, default_timeout=5.0, waiter=waiter)


@pytest.fixture
def make_config(tmp_path, monkeypatch):
    """Build an EnvironmentConfig from a dict written to a temp config.yaml."""
    monkeypatch.delenv("ENVIRONMENT", raising=False)

    def _make(data=None, environment="dev"):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.dump(data or {}), encoding="utf-8")
        return EnvironmentConfig(config_path=config_path, environment=environment)

    return _make
