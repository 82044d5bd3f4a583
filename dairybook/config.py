"""TOML configuration loader."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

from .db.base import DEFAULT_DB_PATH

logger = logging.getLogger(__name__)


@dataclass
class DatabaseConfig:
    path: str = DEFAULT_DB_PATH


@dataclass
class AccountConfig:
    id: str = "local"


@dataclass
class BusinessConfig:
    name: str = "Dairy"
    currency: str = "₹"


LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class DairyConfig:
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    account: AccountConfig = field(default_factory=AccountConfig)
    business: BusinessConfig = field(default_factory=BusinessConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | Path | None = None) -> DairyConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    The database path and account id can come from DAIRYBOOK_DB_PATH and
    DAIRYBOOK_ACCOUNT when the file leaves them empty.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    dbs = raw.get("database", {})
    acc = raw.get("account", {})
    biz = raw.get("business", {})
    log = raw.get("logging", {})

    # config file → environment variable → default
    db_path = (
        dbs.get("path", "")
        or os.environ.get("DAIRYBOOK_DB_PATH", "")
        or DEFAULT_DB_PATH
    )
    account_id = (
        acc.get("id", "")
        or os.environ.get("DAIRYBOOK_ACCOUNT", "")
        or "local"
    )

    level = str(log.get("level", "WARNING")).upper()
    if level not in LOG_LEVELS:
        logger.warning("Unknown log level %r, using WARNING", level)
        level = "WARNING"

    return DairyConfig(
        database=DatabaseConfig(path=db_path),
        account=AccountConfig(id=account_id),
        business=BusinessConfig(
            name=biz.get("name", "Dairy"),
            currency=biz.get("currency", "₹"),
        ),
        logging=LoggingConfig(
            level=level,
        ),
    )
