"""
Conexión a base de datos

Este módulo centraliza el acceso a la base de datos:
- SQLAlchemy ORM (engine, sesiones y Base declarativa de los modelos)
- Dependencia FastAPI para obtener una sesión por request
- Verificación de conexión con reintentos (health check)

PostgreSQL se accede vía psycopg2 (DATABASE_URL=postgresql+psycopg2://...),
la instalación de escritorio usa un archivo SQLite local.

Author: Verduleria
Updated: 2025-11-03
"""
import time
import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import settings

logger = logging.getLogger(__name__)

_IN_TRANSACTION = "verduleria.in_transaction"


# ============================================================================
# SQLAlchemy Configuration
# ============================================================================

def build_engine(database_url: str, **engine_kwargs):
    """
    Create the SQLAlchemy engine for the given URL

    SQLite needs check_same_thread disabled (FastAPI runs sync routes in a
    threadpool) and foreign keys switched on explicitly so that
    ON DELETE CASCADE and the delivery note constraints are honoured.
    """
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url, connect_args={"check_same_thread": False}, **engine_kwargs
        )

        @event.listens_for(engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verificar conexión antes de usar
        pool_size=10,  # Número de conexiones en el pool
        max_overflow=20,  # Conexiones extras si se necesitan
        **engine_kwargs,
    )


# SQLAlchemy Engine
engine = build_engine(settings.DATABASE_URL)

# Session Factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base para modelos
Base = declarative_base()


def get_db():
    """
    FastAPI dependency para obtener sesión de SQLAlchemy

    Usage:
        @router.get("/items")
        def read_items(db: Session = Depends(get_db)):
            ...

    Transactions are owned by the services; this only closes the session.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session):
    """
    Run a block as one transaction: commit on success, rollback on error

    Nested use on the same session joins the outer transaction, so a service
    operation that calls another service still commits exactly once.

    Usage:
        with transaction(self.db):
            ...
    """
    if db.info.get(_IN_TRANSACTION):
        yield db
        return

    db.info[_IN_TRANSACTION] = True
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.info.pop(_IN_TRANSACTION, None)


def init_db(bind=None):
    """Create all tables registered on Base (idempotent)"""
    # Import models so they register on Base.metadata
    from verduleria import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


# ============================================================================
# Database Connection Check with Retry Logic
# ============================================================================

def check_database_connection(max_retries=3, retry_delay=1.0, bind=None) -> float:
    """
    Run SELECT 1 against the database, retrying on connection failures

    Args:
        max_retries: Maximum number of connection attempts (default: 3)
        retry_delay: Initial delay between retries in seconds (default: 1.0)
        bind: Engine to check (default: the application engine)

    Returns:
        Query latency in milliseconds

    Raises:
        sqlalchemy.exc.OperationalError: If all retry attempts fail
    """
    bind = bind or engine
    last_error = None

    for attempt in range(1, max_retries + 1):
        try:
            logger.debug(f"Database connection attempt {attempt}/{max_retries}")
            start = time.time()
            with bind.connect() as conn:
                conn.execute(text("SELECT 1"))
            latency_ms = round((time.time() - start) * 1000, 2)

            logger.debug(f"Database connection successful on attempt {attempt}")
            return latency_ms

        except OperationalError as e:
            last_error = e
            logger.warning(f"Connection error on attempt {attempt}/{max_retries}: {e}")

            # Don't retry on last attempt
            if attempt < max_retries:
                # Exponential backoff
                delay = retry_delay * (2 ** (attempt - 1))
                logger.info(f"Retrying in {delay:.2f} seconds...")
                time.sleep(delay)
            else:
                logger.error(f"All {max_retries} connection attempts failed")

    raise last_error
