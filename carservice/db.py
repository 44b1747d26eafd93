"""Database engine/session setup for SQLAlchemy."""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

DEFAULT_DATABASE_URL = "sqlite:///./carservice.db"

# Declarative base class for ORM models.
Base = declarative_base()


def make_engine(url: str = DEFAULT_DATABASE_URL) -> Engine:
    """Create an engine; SQLite needs check_same_thread off for use across threads."""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


def make_session_factory(engine: Engine) -> sessionmaker:
    """Session factory; each store operation opens and closes its own session."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, class_=Session)


def init_db(engine: Engine) -> None:
    """Create tables that don't exist yet."""
    # Import models so they register on Base.metadata
    from carservice.advisory import store  # noqa: F401

    Base.metadata.create_all(bind=engine)
