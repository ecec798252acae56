"""
Logging configuration for sigwarden.

Diagnostics from signature loading (catalog reads, ignored signatures,
missing-class summaries) go through the ``sigwarden`` logger hierarchy.
The embedding tool calls ``setup_logging`` once with its loaded
``RegistryConfig``; the configured verbosity then decides which of those
diagnostics reach the console:

    config = load_config(verbose=True)
    setup_logging(config)
    registry = SignatureRegistry(provider, config)
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import DEFAULT_CONFIG, RegistryConfig

# quiet keeps only errors; catalog loads are INFO so they show by default
VERBOSITY_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.INFO,
    "verbose": logging.DEBUG,
}


def level_for(verbosity: str) -> int:
    """Map a configured verbosity to a ``logging`` level."""
    return VERBOSITY_LEVELS[verbosity]


def setup_logging(
    config: Optional[RegistryConfig] = None, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route sigwarden diagnostics to a rich console handler.

    Args:
        config: Loaded configuration; its ``verbosity`` picks the level
        log_file: Optional file path that also receives every record

    Returns:
        The ``sigwarden`` logger, set to the configured level
    """
    config = config or DEFAULT_CONFIG
    level = level_for(config.verbosity)
    verbose = config.verbosity == "verbose"

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers)

    # registry and catalog loggers are children and inherit this level
    logger = logging.getLogger("sigwarden")
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'sigwarden.signatures.registry')
              If None, returns the root sigwarden logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger("sigwarden")

    if not name.startswith("sigwarden"):
        name = f"sigwarden.{name}"

    return logging.getLogger(name)
