# ================================
# file: app/services/inspection_items.py
# ================================
"""
Danh mục hạng mục kiểm tra cầu trục (3 cấp: section → category → item).

The ids are part of the template placeholder keys
(`{section}_{category}_{item}`), so they must never be renamed.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Optional, Tuple

log = logging.getLogger("documents")

DEFECT_SUFFIX = "_defect"


@dataclass(frozen=True)
class InspectionItem:
    id: str
    label: str


@dataclass(frozen=True)
class InspectionCategory:
    id: str
    title: str
    items: Tuple[InspectionItem, ...]


@dataclass(frozen=True)
class InspectionSection:
    id: str
    title: str
    categories: Tuple[InspectionCategory, ...]


def _cat(cid: str, title: str, *items: Tuple[str, str]) -> InspectionCategory:
    return InspectionCategory(cid, title, tuple(InspectionItem(i, label) for i, label in items))


INSPECTION_ITEMS: Tuple[InspectionSection, ...] = (
    InspectionSection("hoisting", "巻上部", (
        _cat("brake", "ブレーキ",
             ("lining_wear", "ライニング摩耗の有無"),
             ("slip", "スリップ状況"),
             ("solenoid_shoe_pin", "ソレノイド・シュー・ピン 摩耗作動の有無")),
        _cat("limit_switch", "リミットスイッチ",
             ("limit_lever_gap", "リミットレバー・ギャップ作動の有無"),
             ("contact_wear_limit", "接点摩耗の有無")),
        _cat("frame", "フレーム",
             ("crack_deform", "亀裂・変形の有無")),
        _cat("wire_rope", "ワイヤロープ（チェン）",
             ("wear", "摩耗の有無"),
             ("wire_break", "素線切断の有無"),
             ("rope_end_equalizer", "ロープエンド・エコライザー異常の有無")),
        _cat("load_block", "ロードブロック",
             ("hook_retainer_deform", "フック外れ止め金具変形の有無"),
             ("sheave_pin_wear", "シーブ・ピン摩耗破損の有無"),
             ("hook_wear", "フック摩耗・疵の有無")),
    )),
    InspectionSection("lateral", "横行部", (
        _cat("trolley", "トロリー",
             ("wheel_guide_roller_wear", "ホイル･ガイドローラー摩耗の有無"),
             ("lateral_motor_reducer", "横行電動・減速機異常の有無")),
        _cat("brake_lateral", "ブレーキ",
             ("lining_wear_lateral", "ライニング摩耗の有無"),
             ("solenoid_shoe_pin_lateral", "ソレノイド・シュー・ピン 摩耗作動の有無")),
        _cat("lateral_rail", "横行レール",
             ("rail_curvature_lateral", "レール曲り及び異常の有無"),
             ("stopper_lateral", "ストッパー取付状況")),
    )),
    InspectionSection("traveling", "走行部", (
        _cat("traveling_rail", "走行レール",
             ("obstacle", "クレーンガータの走行範囲障害物の有無"),
             ("rail_curvature", "レール曲り及び異常の有無"),
             ("rail_end_stopper", "レール両端のストッパー状況および取付ボルト緩みの有無"),
             ("rail_bolt", "レール取付ボルト緩みの有無")),
        _cat("girder_saddle", "ガータおよびサドル",
             ("girder_saddle_bolt", "ガータ・サドル取付ボルト緩みの有無"),
             ("guide_roller_wear", "ガイドローラー摩耗の有無"),
             ("wheel_gear_oil", "ホイールギャ歯面および車軸給油状況の良否"),
             ("wheel_axle_wear", "走行車軸の踏面・フランヂ異常摩耗外傷の有無"),
             ("wheel_axle_keep", "車輪軸キープレート変形・緩みの有無"),
             ("saddle_buffer", "サドルのバッファ固定状況")),
        _cat("traveling_mechanical", "走行機械装置",
             ("traveling_motor_reducer", "走行電動減速機異常の有無"),
             ("chain_gear_coupling", "チェン・ギャー・カップリング軸受摩耗の有無"),
             ("lining_wear_mechanical", "ライニング摩耗の有無"),
             ("solenoid_shoe_pin_mechanical", "ソレノイド・シュー・ピン摩耗作動の有無")),
    )),
    InspectionSection("traveling_electrical", "走行電気部", (
        _cat("collector", "集電装置ほか",
             ("cushion_starter", "クッションスターター作動状況"),
             ("collector_trolley", "コレクター・トロリー線摩耗・変形の有無"),
             ("cabtyre_carrier", "キャブタイヤー・キャリアー破損・老化の有無"),
             ("control_panel", "制御盤・電気機器緩みの有無"),
             ("limit_switch_lever", "リミットスイッチ・レバー作動確認")),
        _cat("lubrication", "給油",
             ("hoisting_traveling_oil", "巻上部・走行部給油状況")),
    )),
    InspectionSection("other", "その他", (
        _cat("insulation_resistance", "絶縁抵抗",
             ("insulation_resistance_value", "絶縁抵抗（MΩ）")),
        _cat("push_button", "押釦スイッチ",
             ("contact_wear_button", "接点摩耗の有無"),
             ("wiring_screw", "配線締付ネジゆるみの有無"),
             ("case_insulation", "ケースおよび絶縁板損傷の有無"),
             ("cabtyre_aging", "キャプタイヤー老化・変形の有無")),
        _cat("magnet_switch", "マグネットスイッチ",
             ("contact_wear_magnet", "接点摩耗の有無"),
             ("wiring_screw_magnet", "配線締付ネジゆるみの有無"),
             ("operation_check", "作動確認")),
    )),
)


def iter_item_paths() -> Iterator[Tuple[InspectionSection, InspectionCategory, InspectionItem]]:
    """Duyệt toàn bộ (section, category, item) theo đúng thứ tự khai báo."""
    for section in INSPECTION_ITEMS:
        for category in section.categories:
            for item in category.items:
                yield section, category, item


def placeholder_key(section_id: str, category_id: str, item_id: str) -> str:
    return f"{section_id}_{category_id}_{item_id}"


# ---------- Dữ liệu checklist của 1 phiếu ----------
class ChecklistData:
    """
    Wrapper quanh JSON checklist đã lưu:
        { section_id: { category_id: { item_id: "V", item_id + "_defect": "01" } } }

    `get()` never raises: missing paths, non-dict levels and empty values give "".
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self._data: Mapping[str, Any] = data if isinstance(data, Mapping) else {}

    @classmethod
    def from_text(cls, raw: Optional[str], *, record_id: Optional[str] = None) -> "ChecklistData":
        if raw in (None, ""):
            return cls()
        try:
            parsed = json.loads(raw)
        except (TypeError, ValueError) as e:
            # dữ liệu cũ / hỏng không được chặn việc xuất phiếu
            log.warning("checklist_data parse error (record=%s): %s", record_id, e)
            return cls()
        if not isinstance(parsed, dict):
            log.warning("checklist_data is not an object (record=%s)", record_id)
            return cls()
        return cls(parsed)

    def get(self, section_id: str, category_id: str, key: str) -> str:
        section = self._data.get(section_id)
        if not isinstance(section, Mapping):
            return ""
        category = section.get(category_id)
        if not isinstance(category, Mapping):
            return ""
        value = category.get(key)
        if value in (None, "", False) or isinstance(value, (dict, list)):
            return ""
        return str(value)

    def judgment(self, section_id: str, category_id: str, item_id: str) -> str:
        return self.get(section_id, category_id, item_id)

    def defect(self, section_id: str, category_id: str, item_id: str) -> str:
        return self.get(section_id, category_id, item_id + DEFECT_SUFFIX)
