import logging
import sys
from collections import deque

LOGGER_NAME = "provisioner"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

def configure_logging(log_path: str, level: int = logging.INFO) -> logging.Logger:
    """Attach a stdout handler and an append-mode file handler to the package logger.

    Safe to call more than once; existing handlers are replaced.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    fmt = logging.Formatter(LOG_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    try:
        handlers.append(logging.FileHandler(log_path, mode="a", encoding="utf-8"))
    except OSError as e:
        # stdout logging still works without the file
        logger.warning("cannot open log file %s: %s", log_path, e)

    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    for h in handlers:
        h.setFormatter(fmt)
        logger.addHandler(h)
    logger.propagate = False
    return logger

def tail(log_path: str, lines: int = 200) -> str:
    with open(log_path, "r", encoding="utf-8", errors="replace") as f:
        return "".join(deque(f, maxlen=lines))
