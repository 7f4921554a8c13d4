# This file makes bdd_harness.core a Python package and exposes key classes.

from .config_loader import BrowserConfig, ConfigLoader
from .driver_factory import BrowserSession, DriverFactory, SessionRegistry
from .exceptions import HarnessError, LifecycleError, SessionUnavailableError
from .hooks import LifecycleState, ScenarioLifecycle
from .scenario_context import ScenarioContext

__all__ = [
    "BrowserConfig",
    "BrowserSession",
    "ConfigLoader",
    "DriverFactory",
    "HarnessError",
    "LifecycleError",
    "LifecycleState",
    "ScenarioContext",
    "ScenarioLifecycle",
    "SessionRegistry",
    "SessionUnavailableError",
]
