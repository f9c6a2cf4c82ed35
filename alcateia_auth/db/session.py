import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool


def get_database_url() -> str:
    url = os.getenv("DATABASE_URL", "sqlite:///./alcateia.db")
    # Normalize postgres:// -> postgresql:// for SQLAlchemy
    if url.startswith("postgres://"):
        url = "postgresql://" + url[10:]
    return url


SQLALCHEMY_DATABASE_URL = get_database_url()

if SQLALCHEMY_DATABASE_URL.startswith("sqlite"):
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        echo=False,
    )
else:
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        poolclass=QueuePool,
        pool_size=10,
        max_overflow=20,
        pool_timeout=30,
        pool_pre_ping=True,  # handles stale connections
        pool_recycle=3600,
        echo=False,
    )
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
