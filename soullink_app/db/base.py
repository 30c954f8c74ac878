from __future__ import annotations
import logging
import os
from contextlib import contextmanager
from typing import Iterator, Optional
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker, DeclarativeBase

log = logging.getLogger(__name__)

_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
DB_URL = os.environ.get("SOULLINK_DB_URL", f"sqlite:///{os.path.join(_ROOT, 'soullink.db')}")
DB_ECHO = os.environ.get("SOULLINK_DB_ECHO", "").lower() in ("1", "true", "yes")


def make_engine(url: Optional[str] = None, echo: bool = DB_ECHO) -> Engine:
    """Engine para la URL dada (por defecto la del entorno).

    En SQLite activa las foreign keys, que vienen apagadas por conexión.
    """
    url = url or DB_URL
    eng = create_engine(url, echo=echo, future=True)
    if eng.dialect.name == "sqlite":
        event.listen(eng, "connect", _sqlite_foreign_keys)
    log.debug("Engine creado para %s", eng.url.render_as_string(hide_password=True))
    return eng


def _sqlite_foreign_keys(dbapi_conn, _record) -> None:
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys=ON")
    cur.close()


engine = make_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, future=True)


class Base(DeclarativeBase):
    pass


@contextmanager
def session_scope(factory: sessionmaker = SessionLocal) -> Iterator[Session]:
    """Commit al salir, rollback si algo revienta."""
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
