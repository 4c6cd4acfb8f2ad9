"""Logging utilities for rawrsa modules."""

import logging

ROOT_LOGGER_NAME = 'rawrsa'


def qualify(name: str) -> str:
    """Place a logger name under the rawrsa namespace.

    'server' and 'rawrsa.server' both become 'rawrsa.server'.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + '.'):
        return name
    return f"{ROOT_LOGGER_NAME}.{name}"


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Get a rawrsa logger that defers to whatever handlers the host installs.

    The library never attaches handlers of its own. Records propagate to
    the root logger, so basicConfig() or setup_logging() decide what is
    shown. Until the root logger has a handler the level stays at WARNING,
    keeping debug output about decryption paths quiet.

    Args:
        name: Logger name, with or without the 'rawrsa.' prefix

    Returns:
        Logger inside the rawrsa hierarchy
    """
    logger = logging.getLogger(qualify(name))
    logger.propagate = True

    # Unconfigured hosts get WARNING only
    if not logging.getLogger().handlers:
        logger.setLevel(logging.WARNING)

    return logger
