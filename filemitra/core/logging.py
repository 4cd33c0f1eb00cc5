"""Logging utilities for filemitra modules."""

import logging

ROOT_LOGGER_NAME = 'filemitra'


def get_logger(name: str) -> logging.Logger:
    """Get a logger that automatically inherits from root logger.
    
    This ensures that loggers work with basicConfig() without needing
    explicit setup_logging() calls. The logger will:
    - Propagate to root logger (default behavior)
    - Only set a default level if root logger has no handlers
    
    Args:
        name: Logger name, e.g. 'filemitra.upload'
        
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    
    # basicConfig hasn't been called yet
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)
    
    return logger


def mask_token(text: str, token: str) -> str:
    """Replace every occurrence of a secret token with a short placeholder."""
    if not token:
        return text
    return text.replace(token, f"{token[:4]}***")
