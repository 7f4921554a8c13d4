import logging
import shutil
from typing import Callable, Dict, Union

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.chrome.service import Service as ChromeService
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.edge.service import Service as EdgeService
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.firefox.service import Service as FirefoxService
from selenium.webdriver.remote.webdriver import WebDriver

from webdriver_manager.chrome import ChromeDriverManager
from webdriver_manager.firefox import GeckoDriverManager
from webdriver_manager.microsoft import EdgeChromiumDriverManager

from .constants import DRIVER_BINARIES

logger = logging.getLogger(__name__)

DriverOptions = Union[ChromeOptions, FirefoxOptions, EdgeOptions]


def init_chrome_driver(options: ChromeOptions) -> WebDriver:
    local_driver = shutil.which(DRIVER_BINARIES['chrome'])
    if local_driver:
        logger.info(f"Using local chromedriver at: {local_driver}")
        service = ChromeService(executable_path=local_driver)
    else:
        logger.info("Local chromedriver not found. Falling back to webdriver_manager (requires internet).")
        service = ChromeService(ChromeDriverManager().install())
    return webdriver.Chrome(service=service, options=options)


def init_firefox_driver(options: FirefoxOptions) -> WebDriver:
    local_driver = shutil.which(DRIVER_BINARIES['firefox'])
    if local_driver:
        logger.info(f"Using local geckodriver at: {local_driver}")
        service = FirefoxService(executable_path=local_driver)
    else:
        logger.info("Local geckodriver not found. Falling back to webdriver_manager (requires internet).")
        service = FirefoxService(GeckoDriverManager().install())
    return webdriver.Firefox(service=service, options=options)


def init_edge_driver(options: EdgeOptions) -> WebDriver:
    local_driver = shutil.which(DRIVER_BINARIES['edge'])
    if local_driver:
        logger.info(f"Using local msedgedriver at: {local_driver}")
        service = EdgeService(executable_path=local_driver)
    else:
        logger.info("Local msedgedriver not found. Falling back to webdriver_manager (requires internet).")
        service = EdgeService(EdgeChromiumDriverManager().install())
    return webdriver.Edge(service=service, options=options)


def get_driver_launcher(browser_type: str) -> Callable[[DriverOptions], WebDriver]:
    # Resolved at call time so tests can patch the module-level init functions
    launchers: Dict[str, Callable[[DriverOptions], WebDriver]] = {
        'chrome': init_chrome_driver,
        'firefox': init_firefox_driver,
        'edge': init_edge_driver,
    }
    return launchers[browser_type]
