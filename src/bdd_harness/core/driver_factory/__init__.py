"""
Driver factory package.

Public API:
- DriverFactory: launches configured WebDriver sessions and owns their lifecycle.
- SessionRegistry / BrowserSession: execution-id keyed storage of live sessions.
"""

from .registry import BrowserSession, SessionRegistry
from .service import DriverFactory

__all__ = ["BrowserSession", "DriverFactory", "SessionRegistry"]
