"""
================================================================================
Test Suites Pytest Configuration
================================================================================

Registers the project's test tags as markers and tags UI/unit tests by
the directory they live in.

================================================================================
"""

from pathlib import Path

import pytest


MARKERS = {
    # Priority
    "P0": "Critical priority tests - must pass for deployment",
    "P1": "High priority tests - important functionality",
    "P2": "Medium priority tests - edge cases and minor features",
    "P3": "Low priority tests - extensive validation",
    # Test type
    "smoke": "Quick verification tests",
    "regression": "Full regression test suite",
    "sanity": "Sanity checks after a deployment",
    "integration": "Integration tests between components",
    # Scenario
    "positive": "Happy-path scenarios",
    "negative": "Invalid input and error scenarios",
    "edge": "Boundary and unusual input scenarios",
    # Layer
    "ui": "Browser-driven UI tests",
    "unit": "Framework unit tests (no browser)",
    # Feature
    "login": "Tests related to the login page",
    "dashboard": "Tests related to the dashboard menu",
}

DIRECTORY_MARKERS = {
    "ui_testing": pytest.mark.ui,
    "unit": pytest.mark.unit,
}


def pytest_configure(config):
    for name, description in MARKERS.items():
        config.addinivalue_line("markers", f"{name}: {description}")


def pytest_collection_modifyitems(config, items):
    """Tag tests by the suite directory they were collected from."""
    for item in items:
        parts = Path(str(item.fspath)).parts
        for directory, marker in DIRECTORY_MARKERS.items():
            if directory in parts:
                item.add_marker(marker)
                break


def pytest_report_header(config):
    """Add custom header to pytest output."""
    env = config.getoption("ui_env", default=None) or "from config"
    browser = config.getoption("ui_browser", default=None) or "from config"
    return [
        "",
        "=" * 60,
        "UIFlow Browser Automation Framework",
        f"Environment: {env} | Browser: {browser}",
        "=" * 60,
        "",
    ]
