import threading
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions

from bdd_harness.core.config_loader import BrowserConfig, ConfigLoader
from bdd_harness.core.driver_factory import DriverFactory, SessionRegistry
from bdd_harness.core.driver_factory.service import parse_window_size
from bdd_harness.data_models import RunSettings


def launched_options(launcher: MagicMock):
    launcher.assert_called_once()
    return launcher.call_args.args[0]


class TestBrowserResolution:
    @pytest.mark.parametrize("name", ["safari", "opera", "", "  ", "chromium"])
    def test_unknown_browser_falls_back_to_chrome(self, launchers, name: str) -> None:
        factory = DriverFactory(BrowserConfig.empty())

        session = factory.initialize(name, "exec-1")

        assert session is not None
        assert session.browser == "chrome"
        assert isinstance(launched_options(launchers["chrome"]), ChromeOptions)
        launchers["firefox"].assert_not_called()
        launchers["edge"].assert_not_called()

    @pytest.mark.parametrize("name,kind,options_cls", [
        ("FireFox", "firefox", FirefoxOptions),
        ("EDGE", "edge", EdgeOptions),
        (" Chrome ", "chrome", ChromeOptions),
    ])
    def test_browser_name_is_case_insensitive(self, launchers, name, kind, options_cls) -> None:
        session = DriverFactory(BrowserConfig.empty()).initialize(name, "exec-1")

        assert session.browser == kind
        assert isinstance(launched_options(launchers[kind]), options_cls)


class TestLaunchOptions:
    def test_default_arguments_when_not_configured(self, launchers) -> None:
        DriverFactory(BrowserConfig.empty()).initialize("chrome", "exec-1")

        options = launched_options(launchers["chrome"])
        assert options.arguments == ["--no-sandbox", "--disable-dev-shm-usage", "--start-maximized"]

    def test_configured_arguments_replace_defaults(self, launchers, load_config) -> None:
        config = load_config({"browsers": {"firefox": {"arguments": ["-private"]}}})

        DriverFactory(config).initialize("firefox", "exec-1")

        assert launched_options(launchers["firefox"]).arguments == ["-private"]

    @pytest.mark.parametrize("kind,flag", [
        ("chrome", "--headless=new"),
        ("edge", "--headless=new"),
        ("firefox", "-headless"),
    ])
    def test_headless_flag_is_browser_specific(self, launchers, kind, flag) -> None:
        factory = DriverFactory(BrowserConfig.empty(), RunSettings(headless=True))

        factory.initialize(kind, "exec-1")

        assert launched_options(launchers[kind]).arguments[-1] == flag

    def test_configured_headless_alone_does_not_enable_headless(self, launchers, load_config, mock_driver) -> None:
        config = load_config({"browsers": {"chrome": {"headless": True, "windowSize": "800,600"}}})

        session = DriverFactory(config, RunSettings(headless=False)).initialize("chrome", "exec-1")

        assert session.headless is False
        assert "--headless=new" not in launched_options(launchers["chrome"]).arguments
        mock_driver.maximize_window.assert_called_once()


class TestSessionSetup:
    def test_default_timeouts_applied(self, launchers, mock_driver) -> None:
        DriverFactory(BrowserConfig.empty()).initialize("chrome", "exec-1")

        mock_driver.implicitly_wait.assert_called_once_with(10)
        mock_driver.set_page_load_timeout.assert_called_once_with(30)

    def test_configured_timeouts_applied(self, launchers, load_config, mock_driver) -> None:
        config = load_config({"implicitWait": 4, "pageLoadTimeout": 45})

        DriverFactory(config).initialize("chrome", "exec-1")

        mock_driver.implicitly_wait.assert_called_once_with(4)
        mock_driver.set_page_load_timeout.assert_called_once_with(45)

    def test_headed_session_is_maximized(self, launchers, mock_driver) -> None:
        DriverFactory(BrowserConfig.empty()).initialize("chrome", "exec-1")

        mock_driver.maximize_window.assert_called_once()
        mock_driver.set_window_size.assert_not_called()

    def test_headless_session_uses_configured_window_size(self, launchers, load_config, mock_driver) -> None:
        config = load_config({"browsers": {"chrome": {"headless": True, "windowSize": "800,600"}}})

        session = DriverFactory(config, RunSettings(headless=True)).initialize("chrome", "exec-1")

        assert session is not None
        mock_driver.set_window_size.assert_called_once_with(800, 600)
        mock_driver.maximize_window.assert_not_called()

    def test_headless_session_default_window_size(self, launchers, mock_driver) -> None:
        DriverFactory(BrowserConfig.empty(), RunSettings(headless=True)).initialize("edge", "exec-1")
        mock_driver.set_window_size.assert_called_once_with(1920, 1080)

    def test_bad_window_size_is_not_fatal(self, launchers, load_config, mock_driver) -> None:
        config = load_config({"browsers": {"chrome": {"windowSize": "wide"}}})

        session = DriverFactory(config, RunSettings(headless=True)).initialize("chrome", "exec-1")

        assert session is not None
        mock_driver.set_window_size.assert_not_called()
        mock_driver.maximize_window.assert_not_called()

    def test_missing_configuration_still_launches(self, launchers, mock_driver, tmp_path: Path) -> None:
        config = ConfigLoader(tmp_path / "absent.json").load()

        session = DriverFactory(config).initialize("chrome", "exec-1")

        assert session is not None
        assert session.driver is mock_driver
        assert launched_options(launchers["chrome"]).arguments == [
            "--no-sandbox", "--disable-dev-shm-usage", "--start-maximized",
        ]
        mock_driver.implicitly_wait.assert_called_once_with(10)
        mock_driver.set_page_load_timeout.assert_called_once_with(30)


class TestLaunchFailures:
    def test_launch_failure_returns_none(self, launchers) -> None:
        launchers["chrome"].side_effect = WebDriverException("chrome not reachable")
        factory = DriverFactory(BrowserConfig.empty())

        assert factory.initialize("chrome", "exec-1") is None
        assert factory.get("exec-1") is None
        assert len(factory.registry) == 0

    def test_failure_after_launch_quits_driver_and_registers_nothing(self, launchers, mock_driver) -> None:
        mock_driver.set_page_load_timeout.side_effect = WebDriverException("timeouts rejected")
        factory = DriverFactory(BrowserConfig.empty())

        assert factory.initialize("chrome", "exec-1") is None

        mock_driver.quit.assert_called_once()
        assert "exec-1" not in factory.registry

    def test_geometry_failure_from_driver_is_caught(self, launchers, mock_driver) -> None:
        mock_driver.maximize_window.side_effect = WebDriverException("no window manager")
        factory = DriverFactory(BrowserConfig.empty())

        assert factory.initialize("chrome", "exec-1") is None
        mock_driver.quit.assert_called_once()


class TestSessionRegistryOperations:
    def test_get_returns_registered_session(self, launchers) -> None:
        factory = DriverFactory(BrowserConfig.empty())

        session = factory.initialize("chrome", "exec-1")

        assert factory.get("exec-1") is session
        assert factory.get("other") is None

    def test_quit_removes_session_and_is_idempotent(self, launchers, mock_driver) -> None:
        factory = DriverFactory(BrowserConfig.empty())
        factory.initialize("chrome", "exec-1")

        factory.quit("exec-1")
        factory.quit("exec-1")

        assert factory.get("exec-1") is None
        mock_driver.quit.assert_called_once()

    def test_quit_without_session_does_not_fail(self) -> None:
        DriverFactory(BrowserConfig.empty()).quit("never-started")

    def test_quit_still_unregisters_when_driver_errors(self, launchers, mock_driver) -> None:
        mock_driver.quit.side_effect = WebDriverException("already gone")
        factory = DriverFactory(BrowserConfig.empty())
        factory.initialize("chrome", "exec-1")

        factory.quit("exec-1")

        assert factory.get("exec-1") is None

    def test_close_keeps_registration(self, launchers, mock_driver) -> None:
        factory = DriverFactory(BrowserConfig.empty())
        session = factory.initialize("chrome", "exec-1")

        factory.close("exec-1")

        mock_driver.close.assert_called_once()
        mock_driver.quit.assert_not_called()
        assert factory.get("exec-1") is session

    def test_close_without_session_does_nothing(self) -> None:
        DriverFactory(BrowserConfig.empty()).close("never-started")

    def test_reinitialize_quits_previous_session(self, launchers) -> None:
        first_driver, second_driver = MagicMock(), MagicMock()
        launchers["chrome"].side_effect = [first_driver, second_driver]
        factory = DriverFactory(BrowserConfig.empty())

        factory.initialize("chrome", "exec-1")
        session = factory.initialize("chrome", "exec-1")

        first_driver.quit.assert_called_once()
        second_driver.quit.assert_not_called()
        assert factory.get("exec-1") is session
        assert len(factory.registry) == 1

    def test_sessions_are_isolated_per_execution(self, launchers) -> None:
        drivers = [MagicMock(), MagicMock()]
        launchers["chrome"].side_effect = drivers
        factory = DriverFactory(BrowserConfig.empty())

        a = factory.initialize("chrome", "exec-a")
        b = factory.initialize("chrome", "exec-b")
        factory.quit("exec-a")

        assert a.driver is drivers[0]
        assert b.driver is drivers[1]
        assert factory.get("exec-a") is None
        assert factory.get("exec-b") is b

    def test_quit_all(self, launchers) -> None:
        drivers = [MagicMock(), MagicMock()]
        launchers["chrome"].side_effect = drivers
        factory = DriverFactory(BrowserConfig.empty())
        factory.initialize("chrome", "exec-a")
        factory.initialize("chrome", "exec-b")

        factory.quit_all()

        assert len(factory.registry) == 0
        for driver in drivers:
            driver.quit.assert_called_once()

    def test_parallel_executions_share_one_registry(self, launchers) -> None:
        launchers["chrome"].side_effect = lambda options: MagicMock()
        registry = SessionRegistry()
        factory = DriverFactory(BrowserConfig.empty(), registry=registry)
        results = {}

        def run(execution_id: str) -> None:
            results[execution_id] = factory.initialize("chrome", execution_id)

        threads = [threading.Thread(target=run, args=(f"exec-{i}",)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(registry) == 8
        assert len({id(s.driver) for s in results.values()}) == 8
        for execution_id, session in results.items():
            assert registry.get(execution_id) is session


class TestParseWindowSize:
    def test_parses_with_whitespace(self) -> None:
        assert parse_window_size(" 1280 , 720 ") == (1280, 720)

    @pytest.mark.parametrize("value", ["1280", "1280x720", "a,b", "0,600", "1,2,3", ""])
    def test_rejects_malformed(self, value: str) -> None:
        with pytest.raises(ValueError):
            parse_window_size(value)
