import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Configure application logging

    Args:
        verbose: Log DEBUG records too

    """
    level = logging.DEBUG if verbose else logging.INFO

    root_logger = logging.getLogger()
    if root_logger.handlers:
        # Already configured by the host application
        return
    root_logger.setLevel(level)

    # Console handler on stderr; stdout carries the progress grid
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)
