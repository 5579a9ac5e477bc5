from __future__ import annotations

"""
Logging Core.

Idempotent setup of the root logger for the CLI. Handlers are attached
directly to the root logger and write synchronously.
"""

import logging
from typing import List

from fsrouter.infra.logging.config import (
    _LEVEL_MAP,
    CONSOLE_FORMAT,
    FILE_DATE_FORMAT,
    FILE_FORMAT,
    LoggingConfig,
)
from fsrouter.infra.logging.handlers import (
    _create_console_handler,
    _create_rotating_file_handler,
    _is_our_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_fsrouter_configured"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the root logger once per process.

    Repeated calls are no-ops unless ``force`` is set, in which case the
    handlers installed by a previous call are replaced. Handlers owned by
    anything else are left in place.

    Args:
        cfg: Logging configuration.
        force: Re-install handlers even if already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    level_int = _parse_level(cfg.level)
    root.setLevel(level_int)
    _remove_our_handlers(root)

    handlers: List[logging.Handler] = []
    if cfg.console:
        handlers.append(_create_console_handler(level_int, logging.Formatter(CONSOLE_FORMAT)))

    if cfg.log_file:
        fh = _create_rotating_file_handler(
            cfg.log_file,
            level_int,
            logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh:
            handlers.append(fh)

    for h in handlers:
        root.addHandler(h)

    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


def _remove_our_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()
