import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once with a console handler.

    Safe to call repeatedly; later calls only adjust the level.
    """
    global _configured

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    _configured = True
    logging.getLogger(__name__).debug("Logging configured at %s", level.upper())
