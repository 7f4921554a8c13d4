import json
from pathlib import Path
from typing import Any, Callable, Dict
from unittest.mock import MagicMock, patch

import pytest

from bdd_harness.core.config_loader import BrowserConfig, ConfigLoader
from bdd_harness.core.log_context import NO_EXECUTION, bind_execution_id, reset_execution_id

DRIVERS_MODULE = "bdd_harness.core.driver_factory.drivers"


@pytest.fixture(autouse=True)
def isolated_execution_id():
    """Restores the logging execution id a test may leave bound."""
    token = bind_execution_id(NO_EXECUTION)
    yield
    reset_execution_id(token)


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[Dict[str, Any]], Path]:
    def _write(data: Dict[str, Any]) -> Path:
        config_file = tmp_path / "browser.config.json"
        config_file.write_text(json.dumps(data), encoding="utf-8")
        return config_file

    return _write


@pytest.fixture
def load_config(write_config) -> Callable[[Dict[str, Any]], BrowserConfig]:
    def _load(data: Dict[str, Any]) -> BrowserConfig:
        return ConfigLoader(write_config(data)).load()

    return _load


@pytest.fixture
def mock_driver() -> MagicMock:
    return MagicMock(name="WebDriver")


@pytest.fixture
def launchers(mock_driver):
    """Patches every browser launcher; each returns the shared mock driver."""
    with patch(f"{DRIVERS_MODULE}.init_chrome_driver", return_value=mock_driver) as chrome, \
            patch(f"{DRIVERS_MODULE}.init_firefox_driver", return_value=mock_driver) as firefox, \
            patch(f"{DRIVERS_MODULE}.init_edge_driver", return_value=mock_driver) as edge:
        yield {"chrome": chrome, "firefox": firefox, "edge": edge}
