# app/utils/soft_delete.py
from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Query
from sqlalchemy.sql import and_


def _active_conds(model) -> list:
    """
    Điều kiện "chưa xoá mềm": is_active = TRUE (nếu model có cột này).
    """
    conds = []
    if hasattr(model, "is_active"):
        conds.append(getattr(model, "is_active").is_(True))
    return conds


def exclude_inactive(model: Any, query: Query) -> Query:
    """
    exclude_inactive(DocumentTemplate, query) -> query đã loại bản ghi đã xoá mềm.
    Model không có cột liên quan -> trả nguyên query.
    """
    if not isinstance(query, Query):
        raise TypeError("exclude_inactive expects SQLAlchemy Query")
    conds = _active_conds(model)
    return query.filter(and_(*conds)) if conds else query


def soft_delete(obj: Any) -> Any:
    """Đánh dấu xoá mềm (không commit; caller chủ động)."""
    if hasattr(obj, "is_active"):
        obj.is_active = False
    else:
        raise TypeError(f"{type(obj).__name__} does not support soft delete")
    return obj
