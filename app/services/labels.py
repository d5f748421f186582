# ================================
# file: app/services/labels.py
# ================================
"""
Bảng mã → nhãn hiển thị dùng chung cho phiếu đơn lẻ và in hàng loạt.

Every lookup falls back to the raw code when the code is unknown.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


class WorkType(str, Enum):
    INSPECTION = "INSPECTION"
    REPAIR = "REPAIR"
    MAINTENANCE = "MAINTENANCE"
    OTHER = "OTHER"


class OverallJudgment(str, Enum):
    GOOD = "GOOD"
    CAUTION = "CAUTION"
    BAD = "BAD"
    REPAIR = "REPAIR"


class ProjectStatus(str, Enum):
    PLANNING = "PLANNING"
    IN_PROGRESS = "IN_PROGRESS"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"


WORK_TYPE_LABELS: Dict[str, str] = {
    WorkType.INSPECTION.value: "点検",
    WorkType.REPAIR.value: "修理",
    WorkType.MAINTENANCE.value: "メンテナンス",
    WorkType.OTHER.value: "その他",
}

JUDGMENT_LABELS: Dict[str, str] = {
    OverallJudgment.GOOD.value: "良",
    OverallJudgment.CAUTION.value: "注意",
    OverallJudgment.BAD.value: "不良",
    OverallJudgment.REPAIR.value: "修理",
}

PROJECT_STATUS_LABELS: Dict[str, str] = {
    ProjectStatus.PLANNING.value: "計画中",
    ProjectStatus.IN_PROGRESS.value: "進行中",
    ProjectStatus.ON_HOLD.value: "保留",
    ProjectStatus.COMPLETED.value: "完了",
}

# Ký hiệu đánh giá từng hạng mục kiểm tra
JUDGMENT_SYMBOL_LABELS: Dict[str, str] = {
    "V": "V（良）",
    "△": "△（修理要）",
    "×": "×（特急修理要）",
    "H": "H（手直し済）",
    "P": "P（部品取替済）",
    "A": "A（調整済）",
    "T": "T（増締済）",
    "O": "O（給油脂済）",
    "S": "S（清掃済）",
    "K": "K（経過観察要）",
}

DEFECT_LABELS: Dict[str, str] = {
    "01": "01. 摩耗",
    "02": "02. 変形",
    "03": "03. 破損",
    "04": "04. 亀裂",
    "05": "05. 傷",
    "06": "06. 異音",
    "07": "07. 焼損",
    "08": "08. 断線",
    "09": "09. 劣化",
    "10": "10. 弛み",
    "11": "11. 脱落",
    "12": "12. 汚損",
    "13": "13. 錆",
    "14": "14. 素線切れ",
    "15": "15. キンク",
    "16": "16. 陥没",
    "17": "17. 腐食",
    "18": "18. その他",
}


# ---------- Lookup ----------
def _code_str(code: Optional[object]) -> str:
    if code is None:
        return ""
    # Enum members map to their stored value
    return str(getattr(code, "value", code))


def lookup_label(table: Dict[str, str], code: Optional[object]) -> str:
    """
    Trả nhãn cho `code`; mã không có trong bảng -> trả lại chính mã đó.
    None / "" -> "".
    """
    key = _code_str(code)
    if not key:
        return ""
    return table.get(key, key)


def work_type_label(code: Optional[object]) -> str:
    return lookup_label(WORK_TYPE_LABELS, code)


def judgment_label(code: Optional[object]) -> str:
    return lookup_label(JUDGMENT_LABELS, code)


def project_status_label(code: Optional[object]) -> str:
    return lookup_label(PROJECT_STATUS_LABELS, code)


def judgment_symbol_label(code: Optional[object]) -> str:
    return lookup_label(JUDGMENT_SYMBOL_LABELS, code)


def defect_label(code: Optional[object]) -> str:
    return lookup_label(DEFECT_LABELS, code)
