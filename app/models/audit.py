# app/models/audit.py
from sqlalchemy import Column, Integer, String, DateTime, JSON, func
from app.db.base import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    occurred_at = Column(DateTime, server_default=func.now(), nullable=False)

    # DOCUMENT_GENERATE / DOCUMENT_BULK_GENERATE / TEMPLATE_UPLOAD / EXCEPTION
    action = Column(String(64), nullable=False)
    status = Column(String(32), nullable=True)

    target_type = Column(String(64), nullable=True)
    target_id = Column(String(128), nullable=True)

    actor_id = Column(String(128), nullable=True)
    actor_name = Column(String(255), nullable=True)
    ip_address = Column(String(64), nullable=True)
    path = Column(String(255), nullable=True)
    correlation_id = Column(String(64), nullable=True)

    hmac_hash = Column(String(128), nullable=False)

    new_values = Column(JSON, nullable=True)

