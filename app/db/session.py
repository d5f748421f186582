# app/db/session.py
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from .base import Base
from ..core.config import settings

log = logging.getLogger("db")


def make_engine(url_str: str):
    url = make_url(url_str)
    kwargs = {"future": True}
    connect_args = {}
    backend = url.get_backend_name()
    if backend.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        # sqlite in-memory: 1 connection dùng chung, nếu không mỗi session thấy DB rỗng
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
    elif backend.startswith("mysql"):
        # với PyMySQL, charset nên có trong query string,
        # nhưng để chắc ăn vẫn truyền xuống DBAPI connect()
        connect_args["charset"] = "utf8mb4"
        kwargs.update(pool_pre_ping=True, pool_recycle=3600)

    return create_engine(url_str, connect_args=connect_args, **kwargs)


engine = make_engine(settings.DB_URL)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def init_db(bind=None):
    """Tạo bảng cho toàn bộ model (idempotent)."""
    from .. import models  # noqa: F401  (đăng ký model vào Base.metadata)

    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    log.info("DB init OK with %s", bind.url.render_as_string(hide_password=True))


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
