import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional

from selenium.webdriver.remote.webdriver import WebDriver

logger = logging.getLogger(__name__)


@dataclass
class BrowserSession:
    """One live WebDriver connection, owned by a single execution for one scenario."""
    execution_id: str
    browser: str
    headless: bool
    driver: WebDriver

    def quit(self) -> None:
        self.driver.quit()

    def close(self) -> None:
        self.driver.close()


class SessionRegistry:
    """
    Maps execution ids to their owned BrowserSession.

    Holds at most one session per execution id. The lock only guards the
    mapping; sessions themselves are never shared between executions.
    """

    def __init__(self):
        self._sessions: Dict[str, BrowserSession] = {}
        self._lock = threading.Lock()

    def get(self, execution_id: str) -> Optional[BrowserSession]:
        with self._lock:
            return self._sessions.get(execution_id)

    def register(self, session: BrowserSession) -> Optional[BrowserSession]:
        """Stores a session and returns the one it displaced, if any."""
        with self._lock:
            previous = self._sessions.get(session.execution_id)
            self._sessions[session.execution_id] = session
        return previous

    def remove(self, execution_id: str) -> Optional[BrowserSession]:
        with self._lock:
            return self._sessions.pop(execution_id, None)

    def execution_ids(self) -> List[str]:
        with self._lock:
            return list(self._sessions)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, execution_id: object) -> bool:
        with self._lock:
            return execution_id in self._sessions
