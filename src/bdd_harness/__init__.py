"""Selenium + behave UI test harness."""

__version__ = "0.1.0"
