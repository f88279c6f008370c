import logging
import time
from contextlib import contextmanager
from typing import Generator
from sqlalchemy import create_engine, event, text, Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create a SQLAlchemy engine configured for the given URL.

    SQLite gets a thread-agnostic connection (and a single shared one for
    in-memory databases); everything else gets a pre-pinged QueuePool.
    """
    if database_url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return create_engine(database_url, echo=echo, **options)

    return create_engine(
        database_url,
        poolclass=QueuePool,
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,
        pool_recycle=300,
        echo=echo
    )


class Database:
    """
    Process-scoped database resource.

    Created once by the application factory, initialized on startup and
    disposed on shutdown. Sessions are handed out through ``session()``.
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.engine = build_engine(database_url, echo=echo)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine
        )

        @event.listens_for(self.engine, "connect")
        def receive_connect(dbapi_connection, connection_record):
            logger.debug("Database connection established")

    def init(self, max_retries: int = 10, delay: float = 5) -> bool:
        """
        Create database tables with retry logic

        Returns:
            bool: True if successful

        Raises:
            OperationalError: If the database is still unreachable after all retries
        """
        # Import all models here to ensure they are registered
        from ..models import task, user  # noqa: F401

        for attempt in range(max_retries):
            try:
                logger.info(f"Attempting to connect to database (attempt {attempt + 1}/{max_retries})")
                Base.metadata.create_all(bind=self.engine)
                logger.info("Database tables created successfully")
                return True
            except OperationalError as e:
                logger.warning(f"Database connection failed (attempt {attempt + 1}): {e}")
                if attempt < max_retries - 1:
                    logger.info(f"Retrying in {delay} seconds...")
                    time.sleep(delay)
                else:
                    logger.error("Failed to connect to database after all retries")
                    raise
        return False

    def dispose(self) -> None:
        """Release every pooled connection"""
        self.engine.dispose()
        logger.info("Database connections disposed")

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Database session scope

        Yields:
            Session: Database session, rolled back if the block raises
        """
        db = self.SessionLocal()
        try:
            yield db
        except Exception as e:
            # Callers decide whether the failure is worth an error log
            logger.debug(f"Rolling back database session: {e}")
            db.rollback()
            raise
        finally:
            db.close()

    def check_connection(self) -> bool:
        """
        Check database connectivity

        Returns:
            bool: True if connected, False otherwise
        """
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            logger.debug("Database connection check successful")
            return True
        except Exception as e:
            logger.error(f"Database connection check failed: {e}")
            return False
