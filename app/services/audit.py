# app/services/audit.py
from __future__ import annotations

import hashlib
import hmac
import json
import logging
import os
from typing import Any, Dict, Optional

from fastapi import Request
from sqlalchemy.orm import Session

from app.models.audit import AuditLog

log = logging.getLogger("audit")

# Bí mật ký HMAC cho audit (đặt biến môi trường ở production)
AUDIT_HMAC_SECRET = os.getenv("AUDIT_HMAC_SECRET", "audit-dev")


def _build_hmac_hash(
    *,
    action: str,
    status: Optional[str],
    target_type: Optional[str],
    target_id: Optional[str],
    correlation_id: Optional[str],
    new_values: Dict[str, Any],
) -> str:
    payload = {
        "action": action or "",
        "status": status or "",
        "target_type": target_type or "",
        "target_id": str(target_id or ""),
        "correlation_id": correlation_id or "",
        "new_values": new_values,
    }
    raw = json.dumps(payload, sort_keys=True, ensure_ascii=False, separators=(",", ":"), default=str)
    return hmac.new(AUDIT_HMAC_SECRET.encode("utf-8"), raw.encode("utf-8"), hashlib.sha256).hexdigest()


def write_audit(
    db: Session,
    *,
    action: str,
    target_type: Optional[str] = None,
    target_id: Optional[str] = None,
    status: str = "SUCCESS",
    new_values: Optional[Dict[str, Any]] = None,
    request: Optional[Request] = None,
) -> AuditLog:
    """
    Ghi 1 dòng audit. Không commit ở đây (để caller chủ động).
    """
    actor_id = None
    actor_name = None
    if request is not None and "session" in request.scope:
        sess = request.session
        actor_id = sess.get("uid")
        actor_name = sess.get("name") or sess.get("username") or actor_id

    ip = request.client.host if (request and request.client) else None
    path = request.url.path if request else None
    cid = getattr(request.state, "correlation_id", None) if request else None

    new_j = dict(new_values or {})

    h = _build_hmac_hash(
        action=action,
        status=status,
        target_type=target_type,
        target_id=target_id,
        correlation_id=cid,
        new_values=new_j,
    )

    row = AuditLog(
        action=action,
        status=status,
        target_type=target_type,
        target_id=str(target_id) if target_id is not None else None,
        new_values=new_j,
        actor_id=str(actor_id) if actor_id is not None else None,
        actor_name=str(actor_name) if actor_name is not None else None,
        ip_address=ip,
        path=path,
        correlation_id=cid,
        hmac_hash=h,
    )
    db.add(row)
    return row


def record_audit(db: Session, **kwargs) -> None:
    """
    Ghi audit + commit; lỗi audit chỉ log, không làm hỏng request chính.
    """
    try:
        write_audit(db, **kwargs)
        db.commit()
    except Exception:
        db.rollback()
        log.exception("audit write failed (action=%s)", kwargs.get("action"))
