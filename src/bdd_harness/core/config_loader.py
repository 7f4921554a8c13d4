import json
import logging
from pathlib import Path
from typing import Dict, List, Any, Union, Optional

from pydantic import ValidationError

from ..data_models import (
    BrowserOptions,
    BrowserSettings,
    ConfigDocument,
    DEFAULT_WINDOW_SIZE,
    DEFAULT_IMPLICIT_WAIT,
    DEFAULT_EXPLICIT_WAIT,
    DEFAULT_PAGE_LOAD_TIMEOUT,
)

# Relative to the working directory the harness is launched from, as behave resolves features/
CONFIG_DIR = Path('config')
DEFAULT_CONFIG_FILE = CONFIG_DIR / 'browser.config.json'

logger = logging.getLogger(__name__)


class BrowserConfig:
    """
    Read-only view over a loaded browser configuration document.

    Every accessor is permissive: a missing key resolves to its built-in default
    and never raises. Instances are safe to share between threads once built.
    """

    def __init__(self, document: Optional[ConfigDocument] = None):
        self.document: ConfigDocument = document if document is not None else ConfigDocument()

    @classmethod
    def empty(cls) -> "BrowserConfig":
        return cls()

    def is_empty(self) -> bool:
        return self.document == ConfigDocument()

    def get_logging_setting(self, setting_name: str, default: Any = None) -> Any:
        """Retrieves a specific setting from the 'logging' block."""
        return self.document.logging.get(setting_name, default)

    def get_browser_options(self, browser: str) -> BrowserOptions:
        """Returns the configured block for a browser, or an empty one when it is not configured."""
        options = self.document.browsers.get(browser.lower())
        if options is None:
            logger.warning(f"Browser configuration not found for: {browser}, returning empty config")
            return BrowserOptions()
        return options

    def get_browser_arguments(self, browser: str) -> List[str]:
        arguments = self.get_browser_options(browser).arguments
        return list(arguments) if arguments is not None else []

    def is_headless(self, browser: str) -> bool:
        headless = self.get_browser_options(browser).headless
        return bool(headless) if headless is not None else False

    def get_window_size(self, browser: str) -> str:
        window_size = self.get_browser_options(browser).window_size
        return window_size if window_size is not None else DEFAULT_WINDOW_SIZE

    def get_implicit_wait(self) -> int:
        value = self.document.implicit_wait
        return value if value is not None else DEFAULT_IMPLICIT_WAIT

    def get_explicit_wait(self) -> int:
        value = self.document.explicit_wait
        return value if value is not None else DEFAULT_EXPLICIT_WAIT

    def get_page_load_timeout(self) -> int:
        value = self.document.page_load_timeout
        return value if value is not None else DEFAULT_PAGE_LOAD_TIMEOUT

    def settings_for(self, browser: str) -> BrowserSettings:
        """Resolves an immutable settings snapshot for one browser kind, defaults applied."""
        options = self.get_browser_options(browser)
        return BrowserSettings(
            browser=browser.lower(),
            arguments=list(options.arguments) if options.arguments is not None else None,
            headless=bool(options.headless),
            window_size=options.window_size if options.window_size is not None else DEFAULT_WINDOW_SIZE,
            implicit_wait=self.get_implicit_wait(),
            explicit_wait=self.get_explicit_wait(),
            page_load_timeout=self.get_page_load_timeout(),
        )


class ConfigLoader:
    def __init__(self, config_file: Union[str, Path] = DEFAULT_CONFIG_FILE):
        """
        Initializes the ConfigLoader. Nothing is read until load() is called.

        Args:
            config_file (Union[str, Path], optional): Path to the browser configuration JSON file.
                                                      Defaults to 'config/browser.config.json'.
        """
        self.config_file: Path = Path(config_file)

    def load(self) -> BrowserConfig:
        """
        Reads and validates the configuration file.

        Returns:
            BrowserConfig: The loaded configuration, or an empty one if the file is
                           missing, unreadable, malformed or fails validation.
        """
        raw = self._load_json(self.config_file, default_value={})
        if not isinstance(raw, dict):
            logger.error(f"Configuration root in {self.config_file} must be a JSON object, got {type(raw).__name__}. Using empty configuration.")
            return BrowserConfig.empty()
        if not raw:
            logger.warning(f"Configuration file '{self.config_file}' was not found or is empty/invalid. Using built-in defaults.")
            return BrowserConfig.empty()

        try:
            document = ConfigDocument.model_validate(raw)
        except ValidationError as e:
            logger.error(f"Configuration in {self.config_file} failed validation: {e}. Using empty configuration.")
            return BrowserConfig.empty()

        logger.info("Browser configuration loaded successfully")
        return BrowserConfig(document=document)

    def _load_json(self, file_path: Path, default_value: Union[Dict, List]) -> Any:
        """
        Loads a JSON file.

        Args:
            file_path (Path): The path to the JSON file.
            default_value (Union[Dict, List]): The default value to return if loading fails.

        Returns:
            Any: The loaded JSON data or the default value.
        """
        if not file_path.exists():
            logger.error(f"Configuration file not found: {file_path}")
            return default_value
        if not file_path.is_file():
            logger.error(f"Configuration path is not a file: {file_path}")
            return default_value

        try:
            with file_path.open('r', encoding='utf-8') as f:
                data = json.load(f)
                logger.debug(f"Successfully loaded JSON from {file_path}")
                return data
        except json.JSONDecodeError as e:
            logger.error(f"Could not decode JSON from {file_path}: {e}")
            return default_value
        except OSError as e:
            logger.error(f"Could not read configuration file {file_path}: {e}")
            return default_value
