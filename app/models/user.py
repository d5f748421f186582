# app/models/user.py
from sqlalchemy import Column, String, DateTime, Boolean, func

from app.db.base import Base
from ._ids import new_id


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(64), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    # ADMIN / EDITOR / VIEWER
    role = Column(String(20), nullable=False, default="VIEWER")
    name = Column(String(128))
    email = Column(String(128))
    phone = Column(String(32))
    is_active = Column(Boolean, default=True)

    last_login_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
