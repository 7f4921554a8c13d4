import logging
from enum import Enum
from typing import Optional

from .driver_factory import BrowserSession, DriverFactory
from .exceptions import LifecycleError
from .log_context import bind_execution_id, reset_execution_id
from .scenario_context import ScenarioContext

logger = logging.getLogger(__name__)


class LifecycleState(Enum):
    NOT_STARTED = "not_started"
    INITIALIZING = "initializing"
    RUNNING = "running"
    TEARING_DOWN = "tearing_down"
    ENDED = "ended"


class ScenarioLifecycle:
    """
    Binds one scenario's start and end to browser session creation and teardown.

    NOT_STARTED -> INITIALIZING -> RUNNING -> TEARING_DOWN -> ENDED
    """

    def __init__(self, factory: DriverFactory):
        self.factory = factory
        self.state = LifecycleState.NOT_STARTED
        self._log_token = None

    def _expect(self, *allowed: LifecycleState) -> None:
        if self.state not in allowed:
            expected = ", ".join(s.name for s in allowed)
            raise LifecycleError(f"Lifecycle is {self.state.name}, expected one of: {expected}")

    def start(self, scenario_context: ScenarioContext) -> Optional[BrowserSession]:
        self._expect(LifecycleState.NOT_STARTED)
        self.state = LifecycleState.INITIALIZING
        self._log_token = bind_execution_id(scenario_context.execution_id)
        logger.info(f"Starting scenario with browser: {scenario_context.browser}")

        session = self.factory.initialize(scenario_context.browser, scenario_context.execution_id)
        scenario_context.session = session
        if session is None:
            logger.error(f"No browser session available for scenario {scenario_context.execution_id}; steps needing a browser will fail.")
        else:
            logger.info(f"Browser initialization completed for: {scenario_context.browser}")

        self.state = LifecycleState.RUNNING
        return session

    def before_step(self, step_name: str = "") -> None:
        self._expect(LifecycleState.RUNNING)
        logger.debug(f"Executing step {step_name}".rstrip())

    def after_step(self, step_name: str = "") -> None:
        self._expect(LifecycleState.RUNNING)
        logger.debug(f"Step execution completed {step_name}".rstrip())

    def finish(self, scenario_context: ScenarioContext) -> None:
        self._expect(LifecycleState.RUNNING)
        self.state = LifecycleState.TEARING_DOWN
        logger.info("Closing browser after scenario")
        try:
            self.factory.quit(scenario_context.execution_id)
        finally:
            scenario_context.session = None
            self.state = LifecycleState.ENDED
            if self._log_token is not None:
                reset_execution_id(self._log_token)
                self._log_token = None
