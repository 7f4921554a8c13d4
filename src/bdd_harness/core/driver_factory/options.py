import logging
from typing import List, Optional

from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions

from .constants import DEFAULT_BROWSER_ARGUMENTS, HEADLESS_ARGUMENTS
from .drivers import DriverOptions

logger = logging.getLogger(__name__)


def new_options(browser_type: str) -> DriverOptions:
    if browser_type == 'firefox':
        return FirefoxOptions()
    if browser_type == 'edge':
        return EdgeOptions()
    return ChromeOptions()


def resolve_arguments(browser_type: str, configured: Optional[List[str]], headless: bool) -> List[str]:
    """
    Returns the launch arguments for a browser kind.

    Configured arguments replace the built-in defaults entirely. The headless
    switch, whose syntax differs per browser kind, is appended last.
    """
    if configured is not None:
        arguments = list(configured)
    else:
        arguments = list(DEFAULT_BROWSER_ARGUMENTS[browser_type])

    if headless:
        arguments.append(HEADLESS_ARGUMENTS[browser_type])
    return arguments


def configure_driver_options(
    browser_type: str,
    *,
    headless: bool,
    arguments: Optional[List[str]],
) -> DriverOptions:
    options = new_options(browser_type)
    for opt in resolve_arguments(browser_type, arguments, headless):
        # Selenium rejects empty arguments outright
        if not opt.strip():
            logger.warning(f"Ignoring blank driver option in {browser_type} arguments")
            continue
        options.add_argument(opt)
    return options
