import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_LOG_CONFIGURED = False


def configure_logging(
    level: Union[int, str] = "INFO", log_file: Optional[Union[str, Path]] = None
) -> None:
    """Install handlers on the package logger once per process."""
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED:
        return

    package_logger = logging.getLogger("craftcalc")
    package_logger.setLevel(level.upper() if isinstance(level, str) else level)
    formatter = logging.Formatter(FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    package_logger.addHandler(stream_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path, maxBytes=2 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)
        package_logger.info("Log file: %s", file_handler.baseFilename)

    _LOG_CONFIGURED = True
