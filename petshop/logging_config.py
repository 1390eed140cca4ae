import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Ensure application logs use ``level`` (INFO by default).

    The root handler is installed only once; later calls just adjust the
    level so repeated store builds in tests do not stack handlers.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    else:
        root_logger.setLevel(numeric_level)
