import uuid
from typing import Optional

from selenium.webdriver.remote.webdriver import WebDriver

from ..data_models import DEFAULT_BROWSER, RunSettings
from .driver_factory import BrowserSession


class ScenarioContext:
    """Per-scenario holder for the browser selection and the active session."""

    def __init__(self, run_settings: Optional[RunSettings] = None, execution_id: Optional[str] = None):
        run_settings = run_settings if run_settings else RunSettings()
        self.browser: str = (run_settings.browser or DEFAULT_BROWSER).lower()
        self.execution_id: str = execution_id or uuid.uuid4().hex
        self.session: Optional[BrowserSession] = None

    @property
    def driver(self) -> Optional[WebDriver]:
        return self.session.driver if self.session else None

    def __repr__(self) -> str:
        return f"ScenarioContext(browser={self.browser!r}, execution_id={self.execution_id!r}, active={self.session is not None})"
