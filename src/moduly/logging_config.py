"""
Logging for Moduly.

Every module logs under the ``moduly`` namespace (``moduly.security.audit``,
``moduly.temporal.git_extractor``, ...). Collaborator failures such as a
missing npm binary or a repository without commits are reported as
warnings or info records on those loggers rather than raised, so the
level chosen here decides how much of a degraded run the user sees.

The library never configures logging on import; ``moduly analyze`` calls
``setup_logging`` once, and programmatic callers of ``moduly.analyze`` keep
whatever configuration they already have.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "moduly"


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route Moduly's log records to stderr through a rich handler.

    Stdout stays reserved for the report itself, so ``--json`` output can
    be piped while warnings still reach the terminal.

    Args:
        verbose: Show DEBUG records (per-file parse skips, enumeration counts)
        quiet: Show only errors; skipped audits and git failures are hidden
        log_file: Optional path that also receives every record, timestamped

    Returns:
        The ``moduly`` root logger
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            # File paths and package names may contain [brackets]
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

    # force: repeated CLI invocations in one process (tests) replace handlers
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``moduly`` namespace; bare names are prefixed."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
