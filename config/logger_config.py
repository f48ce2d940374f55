import logging
from typing import Optional

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'


def setup_logger(name: Optional[str] = None, level: int = logging.INFO,
                 log_file: Optional[str] = None) -> logging.Logger:
    """Attach console (and optionally file) handlers once per logger."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
