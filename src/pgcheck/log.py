import logging

LOGGER_NAME = "pgcheck"

def setup_logger(level=logging.WARNING):
    """
    Attach a stderr handler to the package logger.
    stdout is reserved for the check message read by the monitoring agent.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        h = logging.StreamHandler()
        fmt = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")
        h.setFormatter(fmt)
        logger.addHandler(h)
    logger.setLevel(level)
    return logger
