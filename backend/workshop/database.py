"""Database connection and session management"""
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session
from sqlalchemy.pool import StaticPool
from workshop.config import DATABASE_URL

# Use DeclarativeBase for SQLAlchemy 2.0 compatibility
class Base(DeclarativeBase):
    pass


def is_ephemeral_url(url: str) -> bool:
    """True for an in-memory SQLite URL (no durable storage)"""
    return url in ("sqlite://", "sqlite:///:memory:")


IS_EPHEMERAL = is_ephemeral_url(DATABASE_URL)


def build_engine(url: str):
    """Create an engine; in-memory SQLite shares one connection across the process"""
    if is_ephemeral_url(url):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        url,
        connect_args={"check_same_thread": False} if "sqlite" in url else {},
        pool_pre_ping=True,  # Verify connections before using
        echo=False,  # Set to True for SQL query logging
    )


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency to get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
