from __future__ import annotations

import json

from app.services.inspection_items import INSPECTION_ITEMS, ChecklistData, iter_item_paths
from app.services.labels import (
    DEFECT_LABELS,
    JUDGMENT_SYMBOL_LABELS,
    WorkType,
    defect_label,
    judgment_label,
    judgment_symbol_label,
    project_status_label,
    work_type_label,
)


def test_known_codes_map_to_labels() -> None:
    assert work_type_label("INSPECTION") == "点検"
    assert work_type_label(WorkType.MAINTENANCE) == "メンテナンス"
    assert judgment_label("CAUTION") == "注意"
    assert project_status_label("ON_HOLD") == "保留"
    assert judgment_symbol_label("△") == "△（修理要）"
    assert judgment_symbol_label("×") == "×（特急修理要）"
    assert defect_label("14") == "14. 素線切れ"


def test_unknown_codes_pass_through_unchanged() -> None:
    assert work_type_label("OVERHAUL") == "OVERHAUL"
    assert judgment_label("EXCELLENT") == "EXCELLENT"
    assert project_status_label("ARCHIVED") == "ARCHIVED"
    assert judgment_symbol_label("Z") == "Z"
    assert defect_label("99") == "99"


def test_empty_codes_give_empty_label() -> None:
    assert defect_label(None) == ""
    assert defect_label("") == ""
    assert work_type_label(None) == ""


def test_fixed_tables_sizes() -> None:
    assert sorted(DEFECT_LABELS) == [f"{i:02d}" for i in range(1, 19)]
    assert len(JUDGMENT_SYMBOL_LABELS) == 10


def test_item_paths_are_unique_and_complete() -> None:
    triples = [(s.id, c.id, i.id) for s, c, i in iter_item_paths()]
    assert len(triples) == len(set(triples)) == 46
    assert [s.id for s in INSPECTION_ITEMS] == [
        "hoisting", "lateral", "traveling", "traveling_electrical", "other",
    ]
    assert triples[0] == ("hoisting", "brake", "lining_wear")
    assert triples[-1] == ("other", "magnet_switch", "operation_check")


def test_checklist_data_get_is_total() -> None:
    data = ChecklistData.from_text(json.dumps({
        "hoisting": {"brake": {"lining_wear": "V", "slip": None, "lining_wear_defect": "02"}},
        "lateral": "not-a-dict",
        "other": {"insulation_resistance": {"insulation_resistance_value": 12.5}},
    }))
    assert data.judgment("hoisting", "brake", "lining_wear") == "V"
    assert data.defect("hoisting", "brake", "lining_wear") == "02"
    assert data.judgment("hoisting", "brake", "slip") == ""
    assert data.judgment("lateral", "trolley", "wheel_guide_roller_wear") == ""
    assert data.judgment("missing", "x", "y") == ""
    assert data.judgment("other", "insulation_resistance", "insulation_resistance_value") == "12.5"


def test_checklist_data_malformed_text_is_empty() -> None:
    for raw in ("{not json", "[1, 2]", "null", "", None):
        data = ChecklistData.from_text(raw)
        assert data.judgment("hoisting", "brake", "lining_wear") == ""
