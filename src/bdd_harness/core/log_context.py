import logging
from contextvars import ContextVar, Token

NO_EXECUTION = '-'

_execution_id: ContextVar[str] = ContextVar('execution_id', default=NO_EXECUTION)


def bind_execution_id(execution_id: str) -> Token:
    """Tags every record logged from the current context with the given execution id."""
    return _execution_id.set(execution_id)


def reset_execution_id(token: Token) -> None:
    _execution_id.reset(token)


def current_execution_id() -> str:
    return _execution_id.get()


class ExecutionIdFilter(logging.Filter):
    """Adds the bound execution id to records as ``%(execution_id)s``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.execution_id = _execution_id.get()
        return True
