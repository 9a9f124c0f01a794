"""Logging configuration and setup."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict


def setup_logger(config: Dict) -> logging.Logger:
    """Initialize logging with file and console handlers.

    Args:
        config: Configuration dictionary with 'logging' section

    Returns:
        Configured root logger
    """
    log_config = config.get('logging', {})
    log_level = getattr(logging, str(log_config.get('level', 'INFO')).upper())
    log_file = log_config.get('file', 'logs/vips_header.log')

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Remove existing handlers
    logger.handlers.clear()

    # File logging is skipped when no file is configured
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        max_bytes = log_config.get('max_bytes', 10485760)  # 10MB
        backup_count = log_config.get('backup_count', 5)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        logger.addHandler(file_handler)

    if log_config.get('console_output', True):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        console_handler.setLevel(log_level)
        logger.addHandler(console_handler)

    # libvips warnings arrive on the pyvips logger
    logging.getLogger('pyvips').setLevel(
        getattr(logging, str(log_config.get('vips_level', 'WARNING')).upper())
    )

    logger.debug(f"Log level: {logging.getLevelName(log_level)}")
    logger.debug(f"Log file: {log_file or '<disabled>'}")

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get logger for specific module.

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
