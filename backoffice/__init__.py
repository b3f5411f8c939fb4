"""Fireworks store back-office engines: pricing, amounts in words and invoice PDFs."""
import logging

__version__ = '1.0.0'

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'


def configure_logging(config=None):
    """Configure root logging from the config's LOG_LEVEL."""
    if config is None:
        from config import Config as config

    level = getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger = logging.getLogger('backoffice')
    logger.setLevel(level)
    return logger
