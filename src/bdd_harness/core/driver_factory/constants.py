from typing import Dict, List, Tuple

from ...data_models import DEFAULT_BROWSER

SUPPORTED_BROWSERS: Tuple[str, ...] = ('chrome', 'firefox', 'edge')

# Used only when the configuration has no 'arguments' key for the browser
DEFAULT_BROWSER_ARGUMENTS: Dict[str, List[str]] = {
    'chrome': ['--no-sandbox', '--disable-dev-shm-usage', '--start-maximized'],
    'firefox': ['-no-remote'],
    'edge': ['--no-sandbox', '--disable-dev-shm-usage'],
}

HEADLESS_ARGUMENTS: Dict[str, str] = {
    'chrome': '--headless=new',
    'firefox': '-headless',
    'edge': '--headless=new',
}

# Local driver binary names looked up on PATH before falling back to webdriver_manager
DRIVER_BINARIES: Dict[str, str] = {
    'chrome': 'chromedriver',
    'firefox': 'geckodriver',
    'edge': 'msedgedriver',
}


def normalize_browser_name(browser_name: str) -> Tuple[str, bool]:
    """Returns (browser kind, recognized). Unknown or empty names map to the default kind."""
    normalized = (browser_name or '').strip().lower()
    if normalized in SUPPORTED_BROWSERS:
        return normalized, True
    return DEFAULT_BROWSER, False
