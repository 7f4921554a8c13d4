class HarnessError(Exception):
    """Base exception for the harness"""
    pass


class LifecycleError(HarnessError):
    """Scenario lifecycle hook invoked out of order"""
    pass


class SessionUnavailableError(HarnessError):
    """A step needed a browser session but the scenario has none"""
    pass
