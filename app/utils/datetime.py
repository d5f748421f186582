# ================================
# file: app/utils/datetime.py
# ================================
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

from ..core.config import settings

DateLike = Union[date, datetime]


def display_tz() -> ZoneInfo:
    return ZoneInfo(settings.DISPLAY_TIMEZONE)


def to_display(dt: datetime) -> datetime:
    """DB lưu datetime naive theo UTC -> đổi sang múi giờ hiển thị."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(display_tz())


def fmt_date_ja(v: Optional[DateLike]) -> str:
    """'2025/1/5' (không đệm số 0), rỗng nếu None."""
    if v is None:
        return ""
    if isinstance(v, datetime):
        v = to_display(v)
    return f"{v.year}/{v.month}/{v.day}"


def fmt_time_ja(v: Optional[datetime]) -> str:
    if v is None:
        return ""
    v = to_display(v)
    return f"{v.hour:02d}:{v.minute:02d}"


def fmt_datetime_ja(v: Optional[datetime]) -> str:
    if v is None:
        return ""
    return f"{fmt_date_ja(v)} {fmt_time_ja(v)}"


def iso_date_utc(v: Optional[DateLike]) -> str:
    """Phần ngày ISO (YYYY-MM-DD) tính theo UTC, dùng cho tên file."""
    if v is None:
        return ""
    if isinstance(v, datetime):
        if v.tzinfo is not None:
            v = v.astimezone(timezone.utc)
        return v.date().isoformat()
    return v.isoformat()
