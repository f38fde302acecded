"""
================================================================================
Dashboard UI Tests
================================================================================

Primary menu checks after a successful login.

================================================================================
"""

import allure
import pytest

from testsuites.ui_testing.pages.dashboard_page import DashboardPage


EXPECTED_MENUS = ["Home", "Practice", "Courses", "Blog", "Contact"]


@allure.epic("UI Testing")
@allure.feature("Dashboard")
@pytest.mark.dashboard
class TestDashboard:
    """Dashboard UI test suite."""

    @allure.story("Navigation")
    @allure.title("Primary menu lists the main sections")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P1
    @pytest.mark.regression
    @pytest.mark.integration
    def test_dashboard_menus(self, logged_in_session, dashboard_page: DashboardPage):
        menu_list = dashboard_page.get_menu_list()
        assert menu_list, "Menu list should not be empty"

        normalized = [menu.lower() for menu in menu_list]
        for expected in EXPECTED_MENUS:
            with allure.step(f"Verify menu: {expected}"):
                assert expected.lower() in normalized, f"Menu should contain '{expected}'"

    @allure.story("Navigation")
    @allure.title("Unknown menu is reported as absent")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.P3
    @pytest.mark.negative
    def test_unknown_menu_absent(self, logged_in_session, dashboard_page: DashboardPage):
        assert not dashboard_page.is_menu_present("Definitely Not A Menu")
