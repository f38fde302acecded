"""
Repository-level pytest configuration.

Responsibilities:
  - Command-line options for UI runs (--ui-env, --ui-browser, --ui-headed)
  - Load the environment configuration once per run
  - Logging setup
  - Own the run's ResultAggregator: register the ResultCollector plugin,
    its reporters and the shutdown hook

Under pytest-xdist, results are aggregated in the controller process only;
workers forward their reports to it.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from testsuites.ui_testing.framework.env_config import EnvironmentConfig
from uiflow_tools.common import init_logger
from uiflow_tools.notification import SlackNotifier
from uiflow_tools.report_tools import (
    PLUGIN_NAME,
    AllureEnvironmentReporter,
    JsonSummaryReporter,
    LogSummaryReporter,
    ResultAggregator,
    ResultCollector,
    ShutdownHook,
)


# pytester drives the result collector through real inner pytest sessions
pytest_plugins = ["pytester"]


env_config_key = pytest.StashKey[EnvironmentConfig]()
aggregator_key = pytest.StashKey[ResultAggregator]()
shutdown_hook_key = pytest.StashKey[ShutdownHook]()


def pytest_addoption(parser):
    group = parser.getgroup("uiflow", "UI test run options")
    group.addoption(
        "--ui-env",
        action="store",
        default=None,
        help="Environment section of config/config.yaml to use (default: `environment` setting)",
    )
    group.addoption(
        "--ui-browser",
        action="store",
        default=None,
        help="Browser family: chrome, firefox or edge (default: per-environment setting)",
    )
    group.addoption(
        "--ui-headed",
        action="store_true",
        default=False,
        help="Run the browser with a visible window",
    )


def pytest_configure(config):
    env_config = EnvironmentConfig(environment=config.getoption("--ui-env"))
    config.stash[env_config_key] = env_config

    init_logger(
        level=env_config.get("logging.level", "INFO"),
        log_file=env_config.get("logging.file"),
    )

    if hasattr(config, "workerinput"):
        return

    aggregator = ResultAggregator(environment=env_config.environment)
    aggregator.add_reporter(LogSummaryReporter())
    json_reporter = None
    if env_config.get("reporting.enabled", True):
        json_reporter = JsonSummaryReporter(env_config.get("reporting.output_dir", "reports"))
        aggregator.add_reporter(json_reporter)
        aggregator.add_reporter(
            AllureEnvironmentReporter(
                getattr(config.option, "allure_report_dir", None),
                browser=config.getoption("--ui-browser") or env_config.browser,
            )
        )
    # Notifier last so the report link points at a file already written
    aggregator.add_reporter(
        SlackNotifier.from_config(
            env_config,
            report_path=lambda: json_reporter.last_path if json_reporter else None,
        )
    )

    config.stash[aggregator_key] = aggregator
    config.pluginmanager.register(ResultCollector(aggregator), PLUGIN_NAME)
    config.stash[shutdown_hook_key] = ShutdownHook(aggregator).install()


def pytest_unconfigure(config):
    hook = config.stash.get(shutdown_hook_key, None)
    if hook is not None:
        hook.uninstall()


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session")
def env_config(pytestconfig) -> EnvironmentConfig:
    """Environment configuration loaded for this run."""
    return pytestconfig.stash[env_config_key]
