import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

logger = logging.getLogger("employee_api.database")

Base = declarative_base()

_IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def make_engine(database_url: str) -> Engine:
    # SQLite needs check_same_thread, Postgres must NOT have it
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}

    if database_url in _IN_MEMORY_URLS:
        # every pooled connection would otherwise get its own empty database
        return create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)

    return create_engine(database_url, connect_args=connect_args)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine, session_factory: sessionmaker, admin_username: str, admin_password: str) -> None:
    """Create missing tables and seed the default admin account.

    Safe to run on every boot: existing tables and accounts are left alone.
    """
    # register tables on Base.metadata
    from employee_api.models import account, employee  # noqa: F401
    from employee_api.core.seed import seed_admin_if_empty

    Base.metadata.create_all(bind=engine)
    logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))

    db = session_factory()
    try:
        seed_admin_if_empty(db, admin_username, admin_password)
    finally:
        db.close()
