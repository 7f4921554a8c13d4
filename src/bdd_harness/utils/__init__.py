# This file makes bdd_harness.utils a Python package and exposes key utilities.

from .interactions import Locator, SeleniumActions
from .logger import setup_logger

__all__ = [
    "Locator",
    "SeleniumActions",
    "setup_logger",
]
