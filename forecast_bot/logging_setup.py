import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "forecast_bot"


def setup_logging(log_dir: str | None = None, debug: bool = False) -> logging.Logger:
    """Configure the bot logger with a console handler and optional rotating file."""
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    has_file = any(isinstance(h, RotatingFileHandler) for h in logger.handlers)
    has_console = any(not isinstance(h, RotatingFileHandler) for h in logger.handlers)

    if not has_console:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)

    if log_dir is not None and not has_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            Path(log_dir) / "forecast_bot.log",
            maxBytes=5_000_000,  # 5 MB
            backupCount=3,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger
