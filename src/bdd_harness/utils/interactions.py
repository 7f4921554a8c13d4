import logging
from typing import List, Optional, Tuple, Union

from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.ui import Select, WebDriverWait
from selenium.webdriver.support import expected_conditions as EC
from selenium.common.exceptions import WebDriverException

logger = logging.getLogger(__name__)

Locator = Tuple[str, str]

DEFAULT_INTERACTION_TIMEOUT = 10


class SeleniumActions:
    """
    Bounded-wait interaction primitives over one WebDriver.

    Every primitive that targets an element waits up to ``timeout`` seconds
    and re-raises the Selenium failure after logging it. is_element_present
    is the exception: it returns False instead of raising.
    """

    def __init__(self, driver: WebDriver, timeout: Union[int, float] = DEFAULT_INTERACTION_TIMEOUT):
        self.driver = driver
        self.timeout = timeout
        self.wait = WebDriverWait(driver, timeout)

    def navigate_to(self, url: str) -> None:
        try:
            self.driver.get(url)
            logger.info(f"Navigated to: {url}")
        except WebDriverException as e:
            logger.error(f"Failed to navigate to {url}: {e}", exc_info=True)
            raise

    def click(self, locator: Locator) -> None:
        try:
            element = self.wait.until(EC.element_to_be_clickable(locator))
            element.click()
            logger.info(f"Clicked on element: {locator}")
        except WebDriverException as e:
            logger.error(f"Failed to click on element: {locator}: {e}", exc_info=True)
            raise

    def send_keys(self, locator: Locator, text: str) -> None:
        try:
            element = self.wait.until(EC.visibility_of_element_located(locator))
            element.clear()
            element.send_keys(text)
            logger.info(f"Entered text '{text}' in element: {locator}")
        except WebDriverException as e:
            logger.error(f"Failed to send keys to element: {locator}: {e}", exc_info=True)
            raise

    def get_text(self, locator: Locator) -> str:
        try:
            element = self.wait.until(EC.visibility_of_element_located(locator))
            text = element.text
            logger.info(f"Retrieved text from element: {locator} -> {text}")
            return text
        except WebDriverException as e:
            logger.error(f"Failed to get text from element: {locator}: {e}", exc_info=True)
            raise

    def is_element_present(self, locator: Locator) -> bool:
        """Returns whether a matching element is displayed. Never raises for a missing element."""
        try:
            return bool(self.driver.find_element(*locator).is_displayed())
        except WebDriverException:
            logger.warning(f"Element not found: {locator}")
            return False

    def wait_for_element(self, locator: Locator, seconds: Optional[Union[int, float]] = None) -> WebElement:
        timeout = self.timeout if seconds is None else seconds
        try:
            element = WebDriverWait(self.driver, timeout).until(EC.visibility_of_element_located(locator))
            logger.info(f"Element found within {timeout} seconds: {locator}")
            return element
        except WebDriverException as e:
            logger.error(f"Timeout waiting for element: {locator}: {e}", exc_info=True)
            raise

    def select_dropdown_by_visible_text(self, locator: Locator, visible_text: str) -> None:
        try:
            element = self.wait.until(EC.visibility_of_element_located(locator))
            Select(element).select_by_visible_text(visible_text)
            logger.info(f"Selected dropdown option by visible text: {visible_text}")
        except WebDriverException as e:
            logger.error(f"Failed to select dropdown option: {visible_text}: {e}", exc_info=True)
            raise

    def select_dropdown_by_value(self, locator: Locator, value: str) -> None:
        try:
            element = self.wait.until(EC.visibility_of_element_located(locator))
            Select(element).select_by_value(value)
            logger.info(f"Selected dropdown option by value: {value}")
        except WebDriverException as e:
            logger.error(f"Failed to select dropdown by value: {value}: {e}", exc_info=True)
            raise

    def find_elements(self, locator: Locator) -> List[WebElement]:
        """Waits for at least one match; raises TimeoutException when nothing matches in time."""
        try:
            elements = self.wait.until(EC.presence_of_all_elements_located(locator))
            logger.debug(f"Found {len(elements)} elements for: {locator}")
            return elements
        except WebDriverException as e:
            logger.error(f"Failed to find elements: {locator}: {e}", exc_info=True)
            raise

    def get_current_url(self) -> str:
        return self.driver.current_url

    def get_page_title(self) -> str:
        return self.driver.title

    def get_page_source(self) -> str:
        return self.driver.page_source
