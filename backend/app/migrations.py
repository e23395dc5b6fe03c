"""Utility helpers to ensure the database schema is up to date."""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterable, Iterator, Sequence

from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine, inspect
from sqlalchemy.engine.reflection import Inspector

from .database import SQLALCHEMY_DATABASE_URL, read_int_env

LOGGER = logging.getLogger(__name__)

BACKEND_DIR = Path(__file__).resolve().parent.parent
LOCK_FILENAME = ".alembic-migration.lock"
LOCK_RETRY_DELAY = 0.25
LOCK_TIMEOUT_ENV = "ALEMBIC_MIGRATION_LOCK_TIMEOUT"
DEFAULT_LOCK_TIMEOUT = 30

if os.name == "posix":  # pragma: no cover - platform specific
    import fcntl

RevisionSentinel = tuple[str, Callable[[Inspector], bool]]


def _table_exists(inspector: Inspector, table_name: str) -> bool:
    return inspector.has_table(table_name)


@contextmanager
def _migration_lock(path: Path, *, timeout: float) -> Iterator[None]:
    """Serialise migrations between workers sharing ``path`` (POSIX only)."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a+") as handle:
        if os.name != "posix":  # pragma: no cover - platform specific
            yield
            return
        deadline = time.monotonic() + timeout
        while True:
            try:
                fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
                break
            except BlockingIOError as error:
                if time.monotonic() >= deadline:
                    raise TimeoutError("Timed out waiting for Alembic migration lock") from error
                time.sleep(LOCK_RETRY_DELAY)
        LOGGER.debug("Acquired Alembic migration lock at %s", path)
        try:
            yield
        finally:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


REVISION_SENTINELS: Sequence[RevisionSentinel] = (
    (
        "20261019_0001",
        lambda inspector: _table_exists(inspector, "expenses")
        and _table_exists(inspector, "local_incomes"),
    ),
)


def _determine_latest_revision(inspector: Inspector, sentinels: Iterable[RevisionSentinel]) -> str | None:
    for revision, check in sentinels:
        if check(inspector):
            return revision
    return None


def build_alembic_config(database_url: str | None = None) -> Config:
    config = Config(str(BACKEND_DIR / "alembic.ini"))
    config.set_main_option("script_location", str(BACKEND_DIR / "alembic"))
    config.set_main_option(
        "sqlalchemy.url", database_url or os.getenv("DATABASE_URL") or SQLALCHEMY_DATABASE_URL
    )
    return config


def run_database_migrations() -> None:
    """Run Alembic migrations so the required tables exist before serving requests."""

    config = build_alembic_config()
    final_url = config.get_main_option("sqlalchemy.url")
    LOGGER.info("Running database migrations")

    timeout = read_int_env(LOCK_TIMEOUT_ENV, DEFAULT_LOCK_TIMEOUT)
    with _migration_lock(BACKEND_DIR / LOCK_FILENAME, timeout=timeout):
        connect_args = {"check_same_thread": False} if final_url.startswith("sqlite") else {}
        engine = create_engine(final_url, connect_args=connect_args)

        try:
            inspector = inspect(engine)
            if inspector.has_table("alembic_version"):
                LOGGER.debug("Alembic version table already present; applying migrations if needed")
                command.upgrade(config, "head")
                return

            head_revision = ScriptDirectory.from_config(config).get_current_head()
            detected_revision = _determine_latest_revision(inspector, REVISION_SENTINELS)
            if detected_revision:
                LOGGER.info(
                    "Detected existing tables corresponding to Alembic revision %s; stamping before upgrade",
                    detected_revision,
                )
                command.stamp(config, detected_revision)
                if detected_revision == head_revision:
                    LOGGER.info("Existing schema already matches the latest revision")
                    return

            command.upgrade(config, "head")
        finally:
            engine.dispose()
