"""
Logging setup for the sensor anomaly detectors.

Each package (src, inference, host) gets a console handler plus a rotating
file under config.logs_dir. Detector lifecycle changes, degraded-mode
fallbacks and dropped readings are logged here; predictions themselves are
returned to the caller, not logged.
"""

import logging
import logging.handlers

from .config import config


def setup_logging(logger_name: str = "sensor_anomaly") -> logging.Logger:
    """
    Configure and return a logger instance.
    
    Args:
        logger_name: Name of the logger (typically the package name)
    
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)
    
    # Don't add handlers if logger already configured
    if logger.handlers:
        return logger
    
    logger.setLevel(config.log_level)
    
    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    
    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    
    config.logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = config.logs_dir / f"{logger_name}.log"
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
    )
    file_handler.setLevel(config.log_level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)
    
    return logger
