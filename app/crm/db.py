from __future__ import annotations

from contextlib import contextmanager
from collections.abc import Iterator

from flask import Flask, current_app, g
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from app.crm.config import is_production


def _engine_for(app: Flask) -> Engine:
    url = app.config["DATABASE_URL"]
    options: dict[str, object] = {"pool_pre_ping": True}
    if url.startswith("sqlite"):
        # The dev server and the test client can check a connection out on another thread.
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = app.config["DB_POOL_SIZE"]
        options["pool_recycle"] = app.config["DB_POOL_RECYCLE"]
    return create_engine(url, **options)


def init_db(app: Flask) -> None:
    """Bind an engine and session factory to `app` and close request sessions on teardown."""
    engine = _engine_for(app)
    if not is_production(app.config.get("ENV")):
        event.listen(engine, "checkout", lambda *_: app.logger.debug("DB connection checkout from pool"))

    app.extensions["sqlalchemy_engine"] = engine
    app.extensions["sqlalchemy_sessionmaker"] = sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )
    app.teardown_appcontext(teardown_db_session)

    if app.config.get("CREATE_TABLES_ON_START"):
        app.logger.warning("CREATE_TABLES_ON_START=1 set; creating missing tables before boot.")
        create_tables(app)


def create_tables(app: Flask) -> None:
    """Create any missing tables from the model metadata. Not a migration tool."""
    from app.crm.models import Base

    Base.metadata.create_all(bind=app.extensions["sqlalchemy_engine"])


def db_session() -> Session:
    """Session for the current request, opened on first use."""
    s = g.get("db_session")
    if s is None:
        s = g.db_session = current_app.extensions["sqlalchemy_sessionmaker"]()
    return s


def teardown_db_session(_exc: BaseException | None) -> None:
    s: Session | None = g.pop("db_session", None)
    if s is not None:
        s.close()


@contextmanager
def session_scope(app: Flask) -> Iterator[Session]:
    """Session outside a request (scripts, tests): commit on success, roll back on error."""
    s: Session = app.extensions["sqlalchemy_sessionmaker"]()
    try:
        yield s
        s.commit()
    except Exception:
        s.rollback()
        raise
    finally:
        s.close()
