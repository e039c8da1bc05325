import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Optional

LOG_FILENAME = "todo-dep-tracker.log"

def setup_logging(environ: Optional[Mapping[str, str]] = None):
    """Set up logging configuration for the tododep package with environment-based levels."""
    if environ is None:
        environ = os.environ

    env_level = environ.get('TODODEP_LOG_LEVEL', '').upper()
    is_debug = environ.get('TODODEP_DEBUG', '').lower() in ('1', 'true', 'yes')

    # Default to WARNING so the interactive prompt stays readable
    if is_debug:
        level = logging.DEBUG
    elif env_level:
        level = getattr(logging, env_level, logging.WARNING)
    else:
        level = logging.WARNING

    log_format = '[%(asctime)s] %(levelname)-8s [%(name)s:%(funcName)s:%(lineno)d] %(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'

    detailed_formatter = logging.Formatter(log_format, date_format)
    console_formatter = logging.Formatter(
        '%(levelname)-8s [%(name)s] %(message)s' if is_debug
        else '%(levelname)s: %(message)s'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(level)

    logger = logging.getLogger('tododep')
    logger.setLevel(logging.DEBUG)  # Logger accepts all, handlers filter
    logger.handlers.clear()
    logger.addHandler(console_handler)

    # File log is opt-in; the storage directory may not be writable
    log_dir = environ.get('TODODEP_LOG_DIR')
    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / LOG_FILENAME, encoding='utf-8')
        file_handler.setFormatter(detailed_formatter)
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger

def get_logger(name: str = None):
    """Get a logger instance for a specific module."""
    if name:
        return logging.getLogger(f'tododep.{name}')
    return logging.getLogger('tododep')
