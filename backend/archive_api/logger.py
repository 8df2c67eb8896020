import logging
from logging.handlers import RotatingFileHandler

from archive_api.core.config import settings


def get_logger(name: str):
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(settings.LOG_LEVEL.upper())

    sh = logging.StreamHandler()
    sh.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(sh)

    log_dir = settings.LOG_DIR
    log_dir.mkdir(exist_ok=True, parents=True)
    fh = RotatingFileHandler(log_dir / "app.log", maxBytes=2_000_000, backupCount=5)
    fh.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
    logger.addHandler(fh)
    return logger
