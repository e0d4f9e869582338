import logging
import sys
from typing import Union


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Configure root logging for the application.

    - Logs go to stdout
    - ``level`` accepts either a logging constant or a name such as "DEBUG"
      (as read from the LOG_LEVEL setting)
    - Calling it again only adjusts the level; handlers are installed once
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()

    if root.handlers:
        root.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%H:%M:%S",
        )
    )

    root.addHandler(handler)
    root.setLevel(level)
