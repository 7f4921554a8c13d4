from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional, Dict, Any

DEFAULT_BROWSER = "chrome"
DEFAULT_WINDOW_SIZE = "1920,1080"
DEFAULT_IMPLICIT_WAIT = 10
DEFAULT_EXPLICIT_WAIT = 15
DEFAULT_PAGE_LOAD_TIMEOUT = 30


class BrowserOptions(BaseModel):
    """Raw per-browser block from the configuration document. Absent keys stay None."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    arguments: Optional[List[str]] = Field(None, description="Launch arguments; replaces the built-in defaults when present.")
    headless: Optional[bool] = Field(None, description="Configured headless preference for this browser.")
    window_size: Optional[str] = Field(None, alias="windowSize", description="Window geometry as 'W,H', applied in headless mode.")


class ConfigDocument(BaseModel):
    """Schema of config/browser.config.json. Every field is optional."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    implicit_wait: Optional[int] = Field(None, alias="implicitWait")
    explicit_wait: Optional[int] = Field(None, alias="explicitWait")
    page_load_timeout: Optional[int] = Field(None, alias="pageLoadTimeout")
    browsers: Dict[str, BrowserOptions] = Field(default_factory=dict)
    logging: Dict[str, Any] = Field(default_factory=dict, description="Optional logging block consumed by setup_logger.")

    @field_validator('browsers')
    @classmethod
    def _lowercase_browser_names(cls, value: Dict[str, BrowserOptions]) -> Dict[str, BrowserOptions]:
        return {name.strip().lower(): options for name, options in value.items()}


class BrowserSettings(BaseModel):
    """Resolved, immutable settings snapshot for one browser kind."""
    model_config = ConfigDict(frozen=True)

    browser: str
    arguments: Optional[List[str]] = Field(None, description="Configured arguments, or None to use the built-in defaults.")
    headless: bool = False
    window_size: str = DEFAULT_WINDOW_SIZE
    implicit_wait: int = DEFAULT_IMPLICIT_WAIT
    explicit_wait: int = DEFAULT_EXPLICIT_WAIT
    page_load_timeout: int = DEFAULT_PAGE_LOAD_TIMEOUT


class RunSettings(BaseModel):
    """Process-wide run parameters, passed explicitly into scenario and session construction."""
    model_config = ConfigDict(frozen=True)

    browser: str = Field(DEFAULT_BROWSER, description="Browser selector: chrome, firefox or edge.")
    headless: bool = Field(False, description="Run browsers without a visible window.")
    config_path: Optional[str] = Field(None, description="Override path to the browser configuration JSON.")

    @classmethod
    def from_userdata(cls, userdata: Dict[str, Any]) -> "RunSettings":
        """Builds run settings from behave userdata (-D key=value pairs)."""
        headless_raw = userdata.get('headless', False)
        if isinstance(headless_raw, str):
            headless = headless_raw.strip().lower() in ('1', 'true', 'yes', 'on')
        else:
            headless = bool(headless_raw)
        browser = str(userdata.get('browser') or DEFAULT_BROWSER).strip().lower()
        return cls(
            browser=browser or DEFAULT_BROWSER,
            headless=headless,
            config_path=userdata.get('config') or None,
        )
