# keeptrack/database.py

import logging
from pathlib import Path

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from keeptrack.models import Base


logger = logging.getLogger(__name__)


class Database:
    """
    Store handle owning the SQLAlchemy engine and session factory.
    Open it once at process start and dispose of it at shutdown.
    """

    def __init__(self, url: str):
        self.url = make_url(url)
        self.engine = create_engine(self.url, **self._engine_options())

        if self.url.get_backend_name() == "sqlite":
            # Cascades on assets/records rely on enforced foreign keys.
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def _engine_options(self) -> dict:
        if self.url.get_backend_name() != "sqlite":
            return {"pool_pre_ping": True}

        options = {"connect_args": {"check_same_thread": False}}
        if self.url.database in (None, "", ":memory:"):
            # Every session must see the same in-memory database.
            options["poolclass"] = StaticPool
        else:
            Path(self.url.database).parent.mkdir(parents=True, exist_ok=True)
        return options

    def init_db(self):
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database ready (%s)", self.url.render_as_string(hide_password=True))

    def session(self):
        return self.SessionLocal()

    def dispose(self):
        self.engine.dispose()
        logger.info("Database connections closed")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
