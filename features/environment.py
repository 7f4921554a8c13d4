"""Behave environment hooks binding scenarios to browser sessions."""

import logging

from behave.model import Scenario, Step
from behave.runner import Context

from bdd_harness.core import ConfigLoader, DriverFactory, ScenarioContext, ScenarioLifecycle
from bdd_harness.core.config_loader import DEFAULT_CONFIG_FILE
from bdd_harness.data_models import RunSettings
from bdd_harness.utils import setup_logger

logger = logging.getLogger(__name__)


def before_all(context: Context) -> None:
    run_settings = RunSettings.from_userdata(context.config.userdata)
    browser_config = ConfigLoader(run_settings.config_path or DEFAULT_CONFIG_FILE).load()
    setup_logger(browser_config)
    if browser_config.is_empty():
        logger.warning("No browser configuration loaded; every browser runs with built-in defaults.")

    context.run_settings = run_settings
    context.browser_config = browser_config
    context.driver_factory = DriverFactory(browser_config, run_settings)
    logger.info(f"Run settings: browser={run_settings.browser}, headless={run_settings.headless}")


def before_scenario(context: Context, scenario: Scenario) -> None:
    context.scenario_context = ScenarioContext(context.run_settings)
    context.lifecycle = ScenarioLifecycle(context.driver_factory)
    logger.info(f"Scenario '{scenario.name}' -> execution {context.scenario_context.execution_id}")
    context.lifecycle.start(context.scenario_context)


def before_step(context: Context, step: Step) -> None:
    context.lifecycle.before_step(step.name)


def after_step(context: Context, step: Step) -> None:
    context.lifecycle.after_step(step.name)


def after_scenario(context: Context, scenario: Scenario) -> None:
    context.lifecycle.finish(context.scenario_context)
    logger.info(f"Scenario '{scenario.name}' finished with status {scenario.status.name}")


def after_all(context: Context) -> None:
    factory = getattr(context, "driver_factory", None)
    if factory:
        factory.quit_all()
