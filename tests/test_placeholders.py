from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal

from app.services.inspection_items import iter_item_paths
from app.services.placeholders import build_placeholders, fmt_amount_raw, fmt_amount_yen


def test_checklist_values_and_defect_label(make_record) -> None:
    rec = make_record()
    data = build_placeholders(rec)
    assert data["hoisting_brake_lining_wear"] == "V"
    assert data["hoisting_brake_lining_wear_defect_label"] == "01. 摩耗"


def test_every_schema_item_has_both_keys_even_without_data(make_record) -> None:
    rec = make_record(checklist_data=None)
    data = build_placeholders(rec)
    for s, c, i in iter_item_paths():
        key = f"{s.id}_{c.id}_{i.id}"
        assert data[key] == ""
        assert data[f"{key}_defect_label"] == ""


def test_all_values_are_strings(make_record) -> None:
    rec = make_record(findings=None, document_number=None, overall_judgment=None)
    data = build_placeholders(rec)
    assert all(isinstance(v, str) for v in data.values())
    assert "None" not in data.values()
    assert data["findings"] == ""
    assert data["documentNumber"] == ""
    assert data["overallJudgmentLabel"] == ""


def test_malformed_checklist_same_as_missing(make_record) -> None:
    broken = build_placeholders(make_record(checklist_data="{oops"))
    empty = build_placeholders(make_record(checklist_data=None))
    for s, c, i in iter_item_paths():
        key = f"{s.id}_{c.id}_{i.id}"
        assert broken[key] == empty[key]
        assert broken[f"{key}_defect_label"] == empty[f"{key}_defect_label"]


def test_unknown_keys_ignored_and_unknown_defect_passes_through(make_record) -> None:
    rec = make_record(checklist_data=json.dumps({
        "hoisting": {"frame": {"crack_deform": "Z", "crack_deform_defect": "77", "legacy_item": "V"}},
        "retired_section": {"x": {"y": "V"}},
    }))
    data = build_placeholders(rec)
    assert data["hoisting_frame_crack_deform"] == "Z"
    assert data["hoisting_frame_crack_deform_defect_label"] == "77"
    assert "hoisting_frame_legacy_item" not in data
    assert "retired_section_x_y" not in data


def test_amount_raw_and_formatted(make_record) -> None:
    data = build_placeholders(make_record(amount=Decimal("1000000")))
    assert data["projectAmount"] == "1000000"
    assert data["projectAmountFormatted"] == "¥1,000,000"


def test_amount_helpers() -> None:
    assert fmt_amount_raw(Decimal("1234.50")) == "1234.5"
    assert fmt_amount_yen(Decimal("1234567.5")) == "¥1,234,567.5"
    assert fmt_amount_yen(Decimal("0.12345")) == "¥0.123"
    assert fmt_amount_raw(None) == ""
    assert fmt_amount_yen(Decimal("0")) == ""


def test_dates_use_display_timezone(make_record) -> None:
    # 01:30 UTC = 10:30 JST
    data = build_placeholders(make_record(inspection_date=datetime(2025, 1, 15, 1, 30)))
    assert data["inspectionDate"] == "2025/1/15"
    assert data["inspectionDateDateTime"] == "2025/1/15 10:30"
    assert data["projectStartDate"] == "2025/1/1"
    assert data["projectEndDate"] == "2025/3/31"


def test_metadata_labels(make_record) -> None:
    data = build_placeholders(make_record(work_type="REPAIR", project_status="COMPLETED"))
    assert data["workType"] == "REPAIR"
    assert data["workTypeLabel"] == "修理"
    assert data["projectStatus"] == "COMPLETED"
    assert data["projectStatusLabel"] == "完了"
    assert data["overallJudgmentLabel"] == "良"
    assert data["companyName"] == "株式会社テスト"
    assert data["equipmentName"] == "天井クレーン1号"
    assert data["userName"] == "山田 太郎"


def test_record_without_project(make_record) -> None:
    data = build_placeholders(make_record(with_project=False))
    for key in ("projectTitle", "projectStatus", "projectStatusLabel", "projectStartDate",
                "projectEndDate", "projectAmount", "projectAmountFormatted"):
        assert data[key] == ""


def test_build_is_idempotent(make_record) -> None:
    rec = make_record()
    assert build_placeholders(rec) == build_placeholders(rec)
