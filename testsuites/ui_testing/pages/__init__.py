"""
Page objects for the practice login site.

Pages are composed rather than inherited: each one holds an
``ElementActions`` instance and a mapping of selectors resolved from
configuration when the page is constructed, and exposes user flows built
only from those primitives.
"""

from .dashboard_page import DashboardPage
from .login_page import LoginPage

__all__ = ["DashboardPage", "LoginPage"]
