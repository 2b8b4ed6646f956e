import fcntl
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from alembic.config import Config

from alembic import command
from cruxboard.utils.logging import logger

_MIGRATION_LOCK_PATH = "/tmp/cruxboard-alembic.lock"
_ALEMBIC_INI_PATH = Path(__file__).resolve().parents[2] / "alembic.ini"


@contextmanager
def _migration_lock() -> Iterator[None]:
    with open(_MIGRATION_LOCK_PATH, "w", encoding="utf-8") as lock_file:
        fcntl.flock(lock_file, fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(lock_file, fcntl.LOCK_UN)


def get_alembic_config() -> Config:
    alembic_config = Config(str(_ALEMBIC_INI_PATH))
    alembic_config.set_main_option("script_location", str(_ALEMBIC_INI_PATH.parent / "alembic"))
    return alembic_config


def alembic_run_migrations() -> None:
    with _migration_lock():
        logger.info("Running migrations")
        command.upgrade(get_alembic_config(), "head")
