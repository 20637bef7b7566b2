#!/usr/bin/env python3
"""
Shared logging module for the unit test scaffolding scripts.

Every generator run leaves a trace in an audit log so that you can check
afterwards which source files were scaffolded, when, with what arguments,
and how the run ended.

Usage in a skill script:
    import sys; sys.path.insert(0, str(__import__('pathlib').Path(__file__).resolve().parents[3] / 'scripts' / 'lib'))
    from scaffold_logger import setup_logging, log_execution
    logger = setup_logging()

    @log_execution
    def main():
        logger.info("Doing work...")

Helper modules that only run inside a script take a child logger instead:
    from scaffold_logger import get_logger
    logger = get_logger(__name__)
"""

import functools
import logging
import os
import sys
import time
from pathlib import Path

# ── Constants ────────────────────────────────────────────────────────────────

_LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)-5s | %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
_AUDIT_LOG_NAME = "utgen-audit.log"
_LOG_DIR_ENV = "UTGEN_LOG_DIR"
_MARKER_DIR = ".utgen"

ROOT_LOGGER_NAME = "utgen"

# Module-level state
_initialized_loggers = {}


# ── Log Directory Discovery ──────────────────────────────────────────────────

def find_log_dir(start_path=None):
    """Find or create the directory that holds the audit log.

    Search strategy:
    1. UTGEN_LOG_DIR env var (explicit override)
    2. Walk up from start_path (default: CWD) looking for a .utgen/ directory
    3. Fall back to None (stderr-only logging)
    """
    env_dir = os.environ.get(_LOG_DIR_ENV)
    if env_dir:
        log_path = Path(env_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        return log_path

    return _search_up(Path(start_path) if start_path else Path.cwd())


def _search_up(start_path):
    """Walk up from start_path looking for a .utgen/ directory."""
    current = start_path.resolve()
    for _ in range(10):  # max 10 levels up
        marker = current / _MARKER_DIR
        if marker.is_dir():
            candidate = marker / "logs"
            candidate.mkdir(exist_ok=True)
            return candidate
        if current == current.parent:
            break
        current = current.parent
    return None


# ── Logger Setup ─────────────────────────────────────────────────────────────

def setup_logging(script_name=ROOT_LOGGER_NAME, log_dir=None, level=logging.INFO):
    """Set up logging for a script. Returns a configured logger.

    Args:
        script_name: Name for this logger (default: the shared "utgen" logger)
        log_dir: Optional explicit log directory. If None, auto-discovers.
        level: Logging level (default: INFO)

    Returns:
        logging.Logger configured with stderr + optional file handlers
    """
    if script_name == "__main__":
        script_name = Path(sys.argv[0]).stem if sys.argv else "unknown"

    if script_name in _initialized_loggers:
        return _initialized_loggers[script_name]

    logger = logging.getLogger(script_name)
    logger.setLevel(level)

    if logger.handlers:
        _initialized_loggers[script_name] = logger
        return logger

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)

    # stderr handler: WARNING and above, stdout stays reserved for progress lines
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)

    resolved_dir = Path(log_dir) if log_dir else find_log_dir()
    if resolved_dir:
        attach_audit_log(logger, resolved_dir, level)

    _initialized_loggers[script_name] = logger
    return logger


def get_logger(name):
    """Return a child of the shared logger, so stage modules reuse its handlers."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def attach_audit_log(logger, log_dir, level=logging.INFO):
    """Add a file handler writing to the audit log in log_dir.

    Returns the log file path, or None when the directory is not writable.
    """
    log_file = Path(log_dir) / _AUDIT_LOG_NAME
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == log_file.resolve():
            return log_file
    try:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    except OSError:
        # Can't write to log dir, stderr only
        return None
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT))
    logger.addHandler(file_handler)
    return log_file


def set_level(logger, level):
    """Change the logger level and the level of every handler on it."""
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


# ── Execution Decorator ──────────────────────────────────────────────────────

def log_execution(func):
    """Decorator for a script's main() function. Logs start, end, and duration.

    Usage:
        @log_execution
        def main():
            ...
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = setup_logging()

        start_time = time.monotonic()
        logger.info(f"START | args={sys.argv[1:]} cwd={os.getcwd()}")

        exit_code = 0
        try:
            result = func(*args, **kwargs)
            if isinstance(result, int):
                exit_code = result
            return result
        except SystemExit as e:
            exit_code = e.code if isinstance(e.code, int) else 1
            raise
        except Exception as e:
            exit_code = 2
            logger.error(f"EXCEPTION | {type(e).__name__}: {e}")
            raise
        finally:
            duration = time.monotonic() - start_time
            logger.info(f"END   | exit={exit_code} duration={duration:.1f}s")

    return wrapper
