import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from roomsched.config import settings

FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None, log_dir: Optional[str] = None):
    """
    Console + rotating file ({LOG_DIR}/app.log, 5 x 5MB).
    Safe to call twice, handlers are only attached once.
    """
    level = (level or settings.LOG_LEVEL).upper()

    root = logging.getLogger()
    root.setLevel(level)
    # SQL echo only when asked for explicitly
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    if root.handlers:
        return

    formatter = logging.Formatter(fmt=FORMAT, datefmt=DATEFMT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    path = Path(log_dir or settings.LOG_DIR)
    path.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        path / "app.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)
