# ================================
# file: app/services/renderers.py
# ================================
"""
Ghép dữ liệu placeholder vào template Word (.docx) / Excel (.xlsx).

Both renderers expose `render(template_bytes, placeholders) -> bytes`, so the
services can take any object with that method (tests pass a fake).
"""
from __future__ import annotations

import re
from io import BytesIO
from typing import Dict, Mapping, Optional

from docxtpl import DocxTemplate
from jinja2 import ChainableUndefined, Environment
from openpyxl import load_workbook

from ..core.errors import TemplateRenderError, UnsupportedFormatError
from ..models.document_template import DOCX_MIME, XLSX_MIME

PLACEHOLDER_OPEN = "{{"
_DIGITS_ONLY = re.compile(r"[0-9]+")


def _str_value(v: Optional[object]) -> str:
    return "" if v is None else str(v)


# ---------- Word (.docx) ----------
# Chỉ hỗ trợ `{{key}}`; cú pháp block / comment của Jinja được đổi sang chuỗi không thể gặp
# trong văn bản thường, nên "{%" / "{#" trong nội dung phiếu được giữ nguyên.
BLOCK_START, BLOCK_END = "{%%%", "%%%}"
COMMENT_START, COMMENT_END = "{###", "###}"

# "{%" -> "{&#37;" : vẫn là "{%" khi Word đọc, nhưng regex tiền xử lý của docxtpl không khớp
_LITERAL_TAG_OPENERS = (("{%", "{&#37;"), ("{#", "{&#35;"))


class _FixedKeyTemplate(DocxTemplate):
    def patch_xml(self, src_xml: str) -> str:
        for opener, shielded in _LITERAL_TAG_OPENERS:
            src_xml = src_xml.replace(opener, shielded)
        return super().patch_xml(src_xml)


class WordRenderer:
    """
    docxtpl: gộp các run bị Word cắt ngang `{{ ... }}` trước khi render Jinja,
    nên placeholder bị tách bởi định dạng (bold, đổi font...) vẫn khớp.

    Undefined placeholders render as "" (ChainableUndefined also tolerates `a.b`).
    Values are XML-escaped; "\\n" in a value becomes a line break.
    """

    extension = "docx"

    def _env(self) -> Environment:
        return Environment(
            undefined=ChainableUndefined,
            autoescape=True,
            block_start_string=BLOCK_START,
            block_end_string=BLOCK_END,
            comment_start_string=COMMENT_START,
            comment_end_string=COMMENT_END,
        )

    def render(self, template_bytes: bytes, placeholders: Mapping[str, object]) -> bytes:
        try:
            tpl = _FixedKeyTemplate(BytesIO(template_bytes))
            context = {k: _str_value(v) for k, v in placeholders.items()}
            tpl.render(context, jinja_env=self._env(), autoescape=True)
            out = BytesIO()
            tpl.save(out)
        except Exception as e:
            # zip hỏng, không phải file Word, lỗi cú pháp Jinja, ...
            raise TemplateRenderError(f"テンプレートの処理に失敗しました: {e}") from e
        return out.getvalue()


# ---------- Excel (.xlsx) ----------
def substitute_placeholders(text: str, placeholders: Mapping[str, object]) -> str:
    """
    Thay literal mọi `{{key}}` có trong `text`.
    Key được re.escape, value thay qua lambda nên "\\1", "$" trong value không bị hiểu sai.
    """
    out = text
    for key, value in placeholders.items():
        token = PLACEHOLDER_OPEN + key + "}}"
        if token not in text:
            continue
        replacement = _str_value(value)
        out = re.sub(re.escape(token), lambda _m: replacement, out)
    return out


def coerce_cell_value(text: str):
    """Chuỗi toàn chữ số ASCII -> int (giữ kiểu số cho cột tiền); còn lại giữ nguyên."""
    if _DIGITS_ONLY.fullmatch(text):
        return int(text)
    return text


class SpreadsheetRenderer:
    extension = "xlsx"

    def render(self, template_bytes: bytes, placeholders: Mapping[str, object]) -> bytes:
        try:
            wb = load_workbook(BytesIO(template_bytes))
            for ws in wb.worksheets:
                for row in ws.iter_rows():
                    for cell in row:
                        if cell.value is None:
                            continue
                        text = str(cell.value)
                        if PLACEHOLDER_OPEN not in text:
                            continue
                        cell.value = coerce_cell_value(substitute_placeholders(text, placeholders))
            out = BytesIO()
            wb.save(out)
        except Exception as e:
            # file hỏng, hoặc giá trị có ký tự điều khiển openpyxl không cho ghi (IllegalCharacterError)
            raise TemplateRenderError(f"テンプレートの処理に失敗しました: {e}") from e
        return out.getvalue()


def render_word_document(template_bytes: bytes, placeholders: Mapping[str, object]) -> bytes:
    return WordRenderer().render(template_bytes, placeholders)


def render_spreadsheet(template_bytes: bytes, placeholders: Mapping[str, object]) -> bytes:
    return SpreadsheetRenderer().render(template_bytes, placeholders)


# ---------- Chọn renderer theo MIME ----------
DEFAULT_RENDERERS: Dict[str, object] = {
    DOCX_MIME: WordRenderer(),
    XLSX_MIME: SpreadsheetRenderer(),
}

EXTENSIONS: Dict[str, str] = {
    DOCX_MIME: WordRenderer.extension,
    XLSX_MIME: SpreadsheetRenderer.extension,
}


def get_renderer(mime_type: Optional[str], renderers: Optional[Mapping[str, object]] = None):
    table = DEFAULT_RENDERERS if renderers is None else renderers
    renderer = table.get(mime_type or "")
    if renderer is None:
        raise UnsupportedFormatError("サポートされていないファイル形式です（.docxまたは.xlsxのみ）")
    return renderer
