import logging
from typing import Optional, Tuple

from selenium.webdriver.remote.webdriver import WebDriver

from ..config_loader import BrowserConfig
from ...data_models import BrowserSettings, RunSettings
from .constants import normalize_browser_name
from .drivers import get_driver_launcher
from .options import configure_driver_options
from .registry import BrowserSession, SessionRegistry

logger = logging.getLogger(__name__)


def parse_window_size(window_size: str) -> Tuple[int, int]:
    """Parses a 'W,H' string into (width, height). Raises ValueError on malformed input."""
    parts = [p.strip() for p in str(window_size).split(',')]
    if len(parts) != 2:
        raise ValueError(f"expected 'W,H', got {window_size!r}")
    width, height = int(parts[0]), int(parts[1])
    if width <= 0 or height <= 0:
        raise ValueError(f"window dimensions must be positive, got {window_size!r}")
    return width, height


class DriverFactory:
    def __init__(self, config: BrowserConfig, run_settings: Optional[RunSettings] = None,
                 registry: Optional[SessionRegistry] = None):
        self.config = config
        self.run_settings = run_settings if run_settings else RunSettings()
        self.registry = registry if registry is not None else SessionRegistry()

    def initialize(self, browser_name: str, execution_id: str) -> Optional[BrowserSession]:
        """
        Launches a browser session for an execution and registers it.

        Returns None instead of raising when the browser cannot be launched or
        configured; nothing is left registered in that case.
        """
        browser_type, recognized = normalize_browser_name(browser_name)
        if not recognized:
            logger.warning(f"Browser {browser_name!r} not recognized, defaulting to {browser_type.capitalize()}")

        existing = self.registry.remove(execution_id)
        if existing:
            logger.warning(f"[{execution_id}] Replacing an existing {existing.browser} session.")
            self._quit_quietly(existing.driver, execution_id)

        headless = self.run_settings.headless
        driver: Optional[WebDriver] = None
        try:
            settings = self.config.settings_for(browser_type)
            if settings.headless != headless:
                logger.info(
                    f"Configured headless={settings.headless} for {browser_type} differs from run flag "
                    f"headless={headless}; the run flag wins."
                )
            options = configure_driver_options(browser_type, headless=headless, arguments=settings.arguments)

            driver = get_driver_launcher(browser_type)(options)

            driver.implicitly_wait(settings.implicit_wait)
            driver.set_page_load_timeout(settings.page_load_timeout)
            self._apply_window_geometry(driver, settings, headless)
        except Exception as e:
            logger.error(f"Failed to initialize driver for browser: {browser_name}: {e}", exc_info=True)
            if driver is not None:
                self._quit_quietly(driver, execution_id)
            return None

        session = BrowserSession(execution_id=execution_id, browser=browser_type, headless=headless, driver=driver)
        self.registry.register(session)
        logger.info(f"[{execution_id}] {browser_type.capitalize()} driver initialized (headless={headless}).")
        return session

    def get(self, execution_id: str) -> Optional[BrowserSession]:
        return self.registry.get(execution_id)

    def quit(self, execution_id: str) -> None:
        """Terminates and unregisters the execution's session. Safe to call with no session."""
        session = self.registry.remove(execution_id)
        if not session:
            logger.debug(f"[{execution_id}] No active session to quit.")
            return
        try:
            session.quit()
            logger.info(f"[{execution_id}] Driver quit successfully")
        except Exception as e:
            logger.error(f"[{execution_id}] Error quitting WebDriver: {e}", exc_info=True)

    def close(self, execution_id: str) -> None:
        """Closes the current window but keeps the session registered."""
        session = self.registry.get(execution_id)
        if not session:
            logger.debug(f"[{execution_id}] No active session to close.")
            return
        session.close()
        logger.info(f"[{execution_id}] Driver closed")

    def quit_all(self) -> None:
        for execution_id in self.registry.execution_ids():
            self.quit(execution_id)

    def _apply_window_geometry(self, driver: WebDriver, settings: BrowserSettings, headless: bool) -> None:
        if not headless:
            driver.maximize_window()
            return
        try:
            width, height = parse_window_size(settings.window_size)
        except ValueError as e:
            logger.error(f"Invalid window size {settings.window_size!r} for {settings.browser}: {e}")
            return
        driver.set_window_size(width, height)
        logger.debug(f"Window size set to {width}x{height}")

    @staticmethod
    def _quit_quietly(driver: WebDriver, execution_id: str) -> None:
        try:
            driver.quit()
        except Exception as e:
            logger.warning(f"[{execution_id}] Failed to quit WebDriver during cleanup: {e}")
