import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .db import get_db_url
from .metrics import HitCounter


# load .env so DB_URL is available when not set in shell
load_dotenv()


HOST = "0.0.0.0"
PORT = 8080
APP_PREFIX = "/app"
MAX_CHIRP_LENGTH = 140
PROFANE_MASK = "****"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class Settings:
    db_url: Optional[str] = None
    log_level: str = "INFO"


def load_settings() -> Settings:
    db_url = get_db_url()
    log_level = (os.getenv("CHIRPY_LOG_LEVEL") or "INFO").strip().upper()
    return Settings(db_url=db_url, log_level=log_level)


@dataclass
class ApiConfig:
    """State shared by the handlers of one application instance."""

    fileserver_hits: HitCounter = field(default_factory=HitCounter)
    filepath_root: Path = field(default_factory=Path.cwd)
    db_url: Optional[str] = None


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
