import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from ..core.config_loader import BrowserConfig
from ..core.log_context import ExecutionIdFilter

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(execution_id)s] - %(message)s'
DEFAULT_LOG_FILE = 'logs/harness.log'


def _build_handler(handler: logging.Handler, handler_config: Dict[str, Any],
                   default_level: int, default_format: str) -> logging.Handler:
    level_str = str(handler_config.get('level', logging.getLevelName(default_level))).upper()
    handler.setLevel(getattr(logging, level_str, default_level))
    handler.setFormatter(logging.Formatter(handler_config.get('format', default_format)))
    # Records from third-party loggers carry no execution id until the filter adds one
    handler.addFilter(ExecutionIdFilter())
    return handler


def setup_logger(config: Optional[BrowserConfig] = None, logger_name: Optional[str] = None,
                 base_dir: Optional[Path] = None) -> logging.Logger:
    """
    Sets up a logger (root logger by default) from the 'logging' block of the configuration.

    Every record is tagged with the execution id of the scenario that logged it,
    so interleaved output from concurrent sessions can be told apart. The log
    file path is resolved against base_dir, or the working directory when omitted.
    This function should ideally be called once, before the first scenario runs.
    """
    if config is None:
        config = BrowserConfig.empty()

    log_level_str = str(config.get_logging_setting('level', 'INFO')).upper()
    log_format = config.get_logging_setting('format', DEFAULT_LOG_FORMAT)
    log_level = getattr(logging, log_level_str, logging.INFO)

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)

    # Remove existing handlers so repeated calls do not duplicate output
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console_config = config.get_logging_setting('console_handler', {}) or {}
    if console_config.get('enabled', True):
        logger.addHandler(_build_handler(logging.StreamHandler(sys.stdout), console_config, log_level, log_format))

    file_config = config.get_logging_setting('file_handler', {}) or {}
    if file_config.get('enabled', False):
        log_file_path = (base_dir or Path('.')) / file_config.get('path', DEFAULT_LOG_FILE)
        try:
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            # Logger is not usable yet; report on stderr
            print(f"Error: Could not create log directory {log_file_path.parent}. File logging disabled. Error: {e}", file=sys.stderr)
            return logger

        if file_config.get('rotation_type') == 'size':
            file_handler = logging.handlers.RotatingFileHandler(
                log_file_path,
                maxBytes=int(file_config.get('max_bytes', 1024 * 1024 * 5)),
                backupCount=int(file_config.get('backup_count', 5)),
                encoding='utf-8',
            )
        else:
            file_handler = logging.FileHandler(log_file_path, encoding='utf-8')
        logger.addHandler(_build_handler(file_handler, file_config, log_level, log_format))

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger
