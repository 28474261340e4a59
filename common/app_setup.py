"""
Reusable logging and print setup for the rolespecs tools.

Functions:
    setup_logging      - Configure and return the root logger.
    set_print_logger   - Set the logger for print_and_log and print_error.
    monkeypatch_print  - Replace built-in print with rich print.
    print_and_log      - Print and log an info message.
    print_error        - Print and log an error message.
"""

import builtins
import logging
import os
import sys
from typing import Optional

from rich import print as rich_print

# Module-level variable to hold the logger for print_and_log and print_error
_print_logger: Optional[logging.Logger] = None

LOG_FORMAT = '%(asctime)s %(levelname)s %(process)d %(name)s %(message)s'


def setup_logging(app_name: str = "rolespecs", loglevel: int = logging.INFO,
                  logfile: Optional[str] = None, console: bool = False) -> logging.Logger:
    """
    Set up logging for the application.
    - If console=True, logs go to stderr.
    - Otherwise, logs go to ~/.<app_name>/log.txt or to a custom logfile.
    Returns the configured logger, which is also registered for print_and_log.
    """
    logger = logging.getLogger()
    logger.setLevel(loglevel)
    handler: logging.Handler
    if console:
        handler = logging.StreamHandler(sys.stderr)
    else:
        if logfile is None:
            log_dir = os.path.expanduser(f"~/.{app_name}")
            os.makedirs(log_dir, exist_ok=True)
            logfile = os.path.join(log_dir, "log.txt")
        handler = logging.FileHandler(logfile)

    # Remove any existing handlers
    for h in logger.handlers[:]:
        logger.removeHandler(h)

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    set_print_logger(logger)
    logger.debug("Logger initialized for %s", app_name)
    return logger


def set_print_logger(logger: Optional[logging.Logger]):
    """
    Set the logger to be used by print_and_log and print_error.
    """
    global _print_logger
    _print_logger = logger


def monkeypatch_print():
    """
    Monkeypatch built-in print to use rich.print for all output (no logging).
    """
    def print_to_rich(*args, **kwargs):
        rich_print(*args, **kwargs)
    builtins.print = print_to_rich


def print_and_log(message: str, **kwargs):
    """
    Print to console (via print) and log as info.
    """
    print(message, **kwargs)
    if _print_logger is not None:
        _print_logger.info(message)


def print_error(message: str, **kwargs):
    """
    Print and log an error message (stderr and error level).
    """
    rich_print(f'[bold red]{message}[/bold red]', file=sys.stderr, **kwargs)
    if _print_logger is not None:
        _print_logger.error(message)
