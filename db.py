import logging
from pathlib import Path

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from models import Base
from seed import seed_database

logger = logging.getLogger(__name__)


def _configure_sqlite(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and session factory for one SQLite file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.engine = create_engine(
            f"sqlite:///{self.path}",
            connect_args={"check_same_thread": False},
        )
        event.listen(self.engine, "connect", _configure_sqlite)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self._initialized = False

    def init(self) -> None:
        """Create the file, the tables and the seed data if they are missing."""
        if self._initialized:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        Base.metadata.create_all(bind=self.engine)
        with self.SessionLocal() as session:
            seed_database(session)
        self._initialized = True
        logger.info("Database ready at %s", self.path)

    def session(self):
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
