import logging
import sys

VERBOSITY_LEVELS = ["ERROR", "WARNING", "INFO", "DEBUG"]

# create logger
logger = logging.getLogger("biofmt")
logger.setLevel(logging.INFO)

# create formatter
formatter = logging.Formatter("%(asctime)s - %(module)s - %(levelname)s - %(message)s")

# create console handler and set level to info
ch = logging.StreamHandler(stream=sys.stderr)
ch.setLevel(logging.INFO)
ch.setFormatter(formatter)
logger.addHandler(ch)


def set_verbosity(verbosity: str) -> None:
    """Set the level of the tool logger and its console handler, e.g. "DEBUG"."""
    level = getattr(logging, verbosity)
    logger.setLevel(level)
    ch.setLevel(level)
