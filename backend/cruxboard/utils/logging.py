import logging

from cruxboard.config import environment


def create_logger(level: int) -> logging.Logger:
    logger = logging.getLogger("cruxboard")
    logger.setLevel(level)

    if not logger.handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level)
        formatter = logging.Formatter("[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s")
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    return logger


logger = create_logger(logging.DEBUG if environment.is_dev else logging.INFO)
