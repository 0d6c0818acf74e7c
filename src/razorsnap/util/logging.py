from sensai.util import logging

from razorsnap.constants import RAZORSNAP_LOG_FORMAT


def configure_logging(level: str | int = logging.INFO) -> None:
    """
    Configures root logging for command-line use of razorsnap.

    :param level: a logging level or the name of one (case-insensitive), e.g. "debug"
    """
    if isinstance(level, str):
        level_name = level.upper()
        resolved_level = logging.getLevelName(level_name)
        if not isinstance(resolved_level, int):
            raise ValueError(f"Unknown log level '{level}'")
        level = resolved_level
    logging.configure(format=RAZORSNAP_LOG_FORMAT, level=level)
