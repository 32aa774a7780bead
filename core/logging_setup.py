from __future__ import annotations
import logging


def setup_console_logging(level: int | str = logging.INFO) -> None:
    """
    Call once at start-up. Console handler on the root logger.
    Accepts a level number or a name such as "DEBUG".
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        # already configured (uvicorn or a second call)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] %(levelname)s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root.addHandler(handler)
