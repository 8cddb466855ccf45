# backend/coachplan/db.py
from typing import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from coachplan.config import DATABASE_URL


# --- SQLAlchemy Base ---------------------------------------------------------
class Base(DeclarativeBase):
    pass


# --- Engine / Session --------------------------------------------------------
def make_engine(url: str):
    if url.startswith("sqlite"):
        # SQLite ignores foreign keys unless asked per connection
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            future=True,
        )

        @event.listens_for(engine, "connect")
        def _fk_on(dbapi_conn, _record):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON")
            cur.close()

        return engine
    # pool_pre_ping avoids "stale" connections on container restarts
    return create_engine(url, pool_pre_ping=True, future=True)


engine = make_engine(DATABASE_URL)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    future=True,
)


# FastAPI dependency
def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Used by the /health route
def healthcheck() -> dict:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return {"status": "ok"}
