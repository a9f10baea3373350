"""
utils/logging_config.py
-----------------
Console logging for the whole process, configured once at app start.
"""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level="INFO"):
    """
    Set the root level and attach a console handler to the root logger.
    The handler is only added once (create_app() runs again in tests).
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if root.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
