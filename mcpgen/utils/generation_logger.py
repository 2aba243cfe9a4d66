"""
Run-specific file logging utility.

Each generation run gets its own log file under ``<logs_dir>/<run_id>/``,
so the analysis, synthesis and rendering steps of one request can be read
back together.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

from mcpgen.config import get_settings

# Cache of run-specific loggers
_run_loggers: Dict[str, logging.Logger] = {}


def setup_run_logging(run_id: str, logs_dir: Optional[str] = None) -> Path:
    """
    Set up the logging directory for a run.

    Args:
        run_id: Generation run identifier
        logs_dir: Base directory, defaults to the configured logs directory

    Returns:
        Path: Path to the run's log directory
    """
    base = Path(logs_dir or get_settings().logs_dir)
    run_dir = base / run_id
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def get_generation_logger(
    run_id: str,
    name: str = "generation",
    logs_dir: Optional[str] = None,
    level: int = logging.DEBUG
) -> logging.Logger:
    """
    Get or create a run-specific file logger writing to ``{name}.log``.

    Args:
        run_id: Generation run identifier
        name: Log file stem
        logs_dir: Base directory, defaults to the configured logs directory
        level: Logging level (default: DEBUG)

    Returns:
        logging.Logger: Configured file logger
    """
    logger_key = f"{run_id}_{name}"

    if logger_key in _run_loggers:
        return _run_loggers[logger_key]

    run_dir = setup_run_logging(run_id, logs_dir)

    logger = logging.getLogger(f"run.{logger_key}")
    logger.setLevel(level)
    logger.propagate = False  # Don't propagate to root logger

    file_handler = logging.FileHandler(run_dir / f"{name}.log", mode='a', encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logger.addHandler(file_handler)

    _run_loggers[logger_key] = logger
    return logger


def log_divider(logger: logging.Logger, title: Optional[str] = None) -> None:
    """Log a visual divider for readability."""
    if title:
        logger.debug("=" * 80)
        logger.debug(f" {title}")
        logger.debug("=" * 80)
    else:
        logger.debug("-" * 80)


def log_multiline(logger: logging.Logger, message: str, data: str, max_lines: int = 50) -> None:
    """
    Log a message with multiline data, truncating if too long.

    Args:
        logger: Logger to write to
        message: Header message
        data: Multiline data to log
        max_lines: Maximum number of lines to log (default: 50)
    """
    logger.debug(message)
    lines = data.split('\n')

    if len(lines) > max_lines:
        for line in lines[:max_lines // 2]:
            logger.debug(line)
        logger.debug(f"... [TRUNCATED {len(lines) - max_lines} lines] ...")
        for line in lines[-(max_lines // 4):]:
            logger.debug(line)
    else:
        for line in lines:
            logger.debug(line)


def cleanup_generation_loggers(run_id: str) -> None:
    """Close and forget every file logger of a run."""
    prefix = f"{run_id}_"
    for logger_key in [key for key in _run_loggers if key.startswith(prefix)]:
        logger = _run_loggers.pop(logger_key)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)
