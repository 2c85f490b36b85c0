from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import get_settings


def _unicode_lower(value):
    return value.lower() if value is not None else None


def make_engine(url: str, **kwargs):
    connect_args = kwargs.pop("connect_args", {})
    if not url.startswith("sqlite"):
        return create_engine(url, connect_args=connect_args, **kwargs)

    # SQLite connections are shared with FastAPI's threadpool
    connect_args.setdefault("check_same_thread", False)
    engine = create_engine(url, connect_args=connect_args, **kwargs)

    @event.listens_for(engine, "connect")
    def register_functions(dbapi_conn, connection_record):
        # the built-in lower() only folds ASCII letters
        dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)

    return engine


engine = make_engine(get_settings().database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db(bind=None):
    # import models so they register with Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
