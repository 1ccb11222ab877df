"""
================================================================================
Autotest Tools
================================================================================

Automation utilities shared by the test suites.

Modules:
    - common: Logging setup
    - report_tools: Allure attachment and report helpers

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
