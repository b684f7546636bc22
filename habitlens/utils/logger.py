import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def setup_logger(log_file: str = "logs/habitlens.log", level: str = "INFO",
                 max_bytes: int = 10_000_000, backup_count: int = 5):
    log_path = Path(log_file).resolve()
    log_path.parent.mkdir(exist_ok=True, parents=True)
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # повторный вызов не должен дублировать обработчики
    for existing in logger.handlers:
        if isinstance(existing, RotatingFileHandler) and existing.baseFilename == str(log_path):
            return logger

    handler = RotatingFileHandler(str(log_path), maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
