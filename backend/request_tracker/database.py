"""Database engine lifecycle and session dependency.

The engine and session factory are created once per process by the app
lifespan (see ``main.py``) and stored on ``app.state``; request handlers get
a fresh session per call through ``get_db``.
"""
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):
    pass


def create_db_engine(url: str) -> Engine:
    """Build an engine for ``url``; SQLite connections may cross threads."""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Iterator[Session]:
    """Yield a session bound to the engine opened at startup."""
    session = request.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()
