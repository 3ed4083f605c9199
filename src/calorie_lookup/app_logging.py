"""Logging configuration helpers."""

import logging


def configure_logging(debug: bool = False) -> None:
    """Configure the calorie_lookup logger once; ``debug`` lowers it to DEBUG.

    The level is reapplied on every call so a second app built with a
    different ``Settings.debug`` still takes effect.
    """
    logger = logging.getLogger("calorie_lookup")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
