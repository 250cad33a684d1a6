import uuid

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from billing.config import get_settings

settings = get_settings()


def engine_options(url: str) -> dict:
    """
    Engine keyword arguments for the given database URL.

    SQLite connections are shared across FastAPI's threadpool, so they need
    check_same_thread disabled and get no pool sizing. Server databases get a
    pre-pinged connection pool.
    """
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_size": 10, "max_overflow": 20, "pool_pre_ping": True}


# Create SQLAlchemy engine
engine = create_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency to get database session.
    Yields a database session and closes it after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def generate_id() -> str:
    """Opaque internal identifier assigned to every stored record."""
    return uuid.uuid4().hex
