# product_service/db.py

"""
Database configuration and session management for the Product Service.

The engine lives on a `Database` object that the application factory builds
and stores on `app.state`, so tests and the server can each hand in their own.
"""
import logging
import time

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# Base class for the ORM models
Base = declarative_base()


class Database:
    """
    Owns the SQLAlchemy engine and the session factory bound to it.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        engine_kwargs = {"echo": echo}
        if url.startswith("sqlite"):
            # SQLite connections get shared with FastAPI's worker threads
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url or url.rstrip("/").endswith(":"):
                # Every session must see the same in-memory database
                engine_kwargs["poolclass"] = StaticPool
        else:
            # pool_pre_ping=True helps maintain healthy connections in a pool
            engine_kwargs["pool_pre_ping"] = True
        self.engine = create_engine(url, **engine_kwargs)
        # autoflush=False means changes aren't flushed to DB until commit or explicit flush.
        self.SessionLocal = sessionmaker(autoflush=False, bind=self.engine)

    def connect(self):
        """
        Checks that the database answers and creates any missing tables.
        """
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        Base.metadata.create_all(bind=self.engine)

    def dispose(self):
        self.engine.dispose()


def connect_db(database: Database, max_retries: int = 1, retry_delay_seconds: float = 5):
    """
    Connects to the database and ensures tables exist.

    Failures are logged and never raised: the API keeps serving (docs included)
    and requests fail at the data layer until the database becomes reachable.
    Returns True when the connection succeeded.
    """
    for i in range(max_retries):
        try:
            logger.info(
                f"Attempting to connect to the database and create tables (attempt {i+1}/{max_retries})..."
            )
            database.connect()
            logger.info("Successfully connected to the database and ensured tables exist.")
            return True
        except Exception as e:
            logger.warning(f"Failed to connect to the database: {e}")
            if i < max_retries - 1:
                logger.info(f"Retrying in {retry_delay_seconds} seconds...")
                time.sleep(retry_delay_seconds)
    logger.error("Hubo un error al conectar a la base de datos")
    return False


def get_db(request: Request):
    """
    Dependency to provide a new database session for FastAPI endpoints.
    A session is created for each request and automatically closed after use.
    """
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
