"""Logger setup shared by the app and the command line."""

import logging

LOGGER_NAME = "vtcs_shop"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure logging"""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
