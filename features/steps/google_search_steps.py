"""Step definitions for the Google search feature."""

import logging

from behave import given, then, when
from behave.runner import Context
from selenium.webdriver.common.by import By

from bdd_harness.core import SessionUnavailableError
from bdd_harness.utils import Locator, SeleniumActions

logger = logging.getLogger(__name__)

GOOGLE_URL = "https://www.google.com"

SEARCH_BOX: Locator = (By.NAME, "q")
SEARCH_BUTTON: Locator = (By.NAME, "btnK")
RESULT_STATS: Locator = (By.ID, "result-stats")


def get_actions(context: Context) -> SeleniumActions:
    driver = context.scenario_context.driver
    if driver is None:
        raise SessionUnavailableError(
            f"No browser session for {context.scenario_context.browser}; see the launch error above."
        )
    return SeleniumActions(driver)


@given("User navigates to Google home page")
def step_navigate_to_google(context: Context) -> None:
    actions = get_actions(context)
    actions.navigate_to(GOOGLE_URL)

    page_title = actions.get_page_title()
    assert page_title == "Google", f"Page title mismatch: expected 'Google', got '{page_title}'"
    logger.info("Google home page loaded successfully")


@when('User searches for "{search_term}"')
def step_search_for(context: Context, search_term: str) -> None:
    actions = get_actions(context)
    logger.info(f"Searching for: {search_term}")

    actions.click(SEARCH_BOX)
    actions.send_keys(SEARCH_BOX, search_term)
    actions.click(SEARCH_BUTTON)

    logger.info(f"Search initiated for: {search_term}")


@then("Search results should be displayed")
def step_results_displayed(context: Context) -> None:
    actions = get_actions(context)
    actions.wait_for_element(RESULT_STATS, 10)

    assert actions.is_element_present(RESULT_STATS), "Search results not displayed"
    logger.info("Search results verified successfully")


@then('Results should contain "{keyword}"')
def step_results_contain(context: Context, keyword: str) -> None:
    page_source = get_actions(context).get_page_source()
    assert keyword in page_source, f"Search results do not contain: {keyword}"
    logger.info("Results contain the expected keyword")
