"""Database connection management."""
from typing import Optional
from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import sessionmaker
from rate_weather.config import get_config
from rate_weather.database.models import Base
from rate_weather.utils.paths import resolve_project_path
import logging

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def get_engine() -> Engine:
    """Get or create database engine."""
    global _engine

    if _engine is None:
        config = get_config()
        db_path = resolve_project_path(config.database_path)

        db_path.parent.mkdir(parents=True, exist_ok=True)

        database_url = f"sqlite:///{db_path}"
        _engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},  # SQLite specific
            echo=config.get('database.echo', False)
        )

        logger.info(f"Database engine created: {db_path}")

    return _engine


def get_session_factory() -> sessionmaker:
    """Get or create session factory."""
    global _SessionLocal

    if _SessionLocal is None:
        engine = get_engine()
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    return _SessionLocal


def create_tables():
    """Create all database tables."""
    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")
