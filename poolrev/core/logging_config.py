import logging

from poolrev.core.config import get_log_level


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging() -> None:
    """Configure root logging once for the service."""
    logging.basicConfig(level=get_log_level(), format=LOG_FORMAT)
