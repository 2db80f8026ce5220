import sys
import logging

# --------------------------------------------------------
# One "stickman" logger tree; modules log through
# logging.getLogger(__name__) and inherit this handler.
# --------------------------------------------------------
LOGGER_NAME = "stickman"


def configure_logging(level="INFO") -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # avoid duplicate handlers when called twice
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            '[%(asctime)s] [%(levelname)s] %(name)s: %(message)s',
            datefmt='%H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False
    return logger
