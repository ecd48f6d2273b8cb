from __future__ import annotations

from comparison import header_detector
from comparison.header_detector import detect_elements, find_title_index
from comparison.models import ElementType


RESUME_HEAD = [
    "職務経歴書",
    "20XX年XX月XX日現在",
    "白州 太郎",
    "■職務要約",
    "新卒で入社して以来5年間にわたり営業事務として従事。",
    "株式会社ABC商事（20XX年4月 - 現在）",
    "（従業員数：300名）",
    "- 受発注管理",
    "- 在庫管理",
]


def _styles(elements):
    return [e.special_style for e in elements]


def test_title_date_name_header():
    elements = detect_elements(RESUME_HEAD)

    title, date, name = elements[:3]
    assert title.element_type is ElementType.HEADING1
    assert (title.special_style, title.position, title.is_header) == ("title", "center", True)
    assert date.element_type is ElementType.PARAGRAPH
    assert (date.special_style, date.position, date.is_header) == ("date", "right", True)
    assert name.element_type is ElementType.PARAGRAPH
    assert (name.special_style, name.position, name.is_header) == ("name", "right", True)

    assert [e.is_header for e in elements[3:]] == [False] * (len(elements) - 3)


def test_section_company_patterns():
    elements = detect_elements(RESUME_HEAD)

    assert elements[3].element_type is ElementType.HEADING2
    assert elements[3].special_style == "section"
    assert elements[4].element_type is ElementType.PARAGRAPH
    assert elements[4].special_style is None
    assert elements[5].element_type is ElementType.HEADING3
    assert elements[5].special_style == "companyHeading"
    assert elements[6].element_type is ElementType.PARAGRAPH
    assert elements[6].special_style == "companyInfo"
    assert [e.element_type for e in elements[7:]] == [ElementType.LIST_ITEM] * 2
    assert _styles(elements[7:]) == [None, None]


def test_single_heading1_is_the_title():
    elements = detect_elements(RESUME_HEAD)
    assert [i for i, e in enumerate(elements) if e.element_type is ElementType.HEADING1] == [0]


def test_repeated_title_string_keeps_first_as_heading1():
    elements = detect_elements(["職務経歴書", "2024年1月1日現在", "山田 花子", "職務経歴書"])
    assert [e.element_type for e in elements].count(ElementType.HEADING1) == 1
    assert elements[0].special_style == "title"
    assert elements[3].element_type is ElementType.HEADING2


def test_title_not_on_first_line():
    lines = ["提出用の書類です。", "職務経歴書", "2024年1月1日現在", "山田 花子", "本文です。"]
    elements = detect_elements(lines)

    assert find_title_index(lines) == 1
    assert elements[0].is_header is False
    assert _styles(elements[1:4]) == ["title", "date", "name"]
    # The date line would otherwise be a date-prefixed Heading2.
    assert elements[2].element_type is ElementType.PARAGRAPH
    assert elements[4].special_style is None


def test_title_outside_scan_window_is_not_a_header():
    lines = ["一行目。", "二行目。", "三行目。", "四行目。", "五行目。", "職務経歴書"]
    elements = detect_elements(lines)

    assert find_title_index(lines) is None
    assert not any(e.is_header for e in elements)
    assert elements[5].special_style is None


def test_short_documents_do_not_overrun():
    only_title = detect_elements(["職務経歴書"])
    assert _styles(only_title) == ["title"]

    title_and_date = detect_elements(["職務経歴書", "2024年1月1日現在"])
    assert _styles(title_and_date) == ["title", "date"]


def test_empty_document():
    assert detect_elements([]) == []


def test_company_info_needs_round_brackets():
    elements = detect_elements(["本文です。", "【資格】", "(設立: 1990年)", "本文です。"])
    assert elements[1].special_style is None
    assert elements[1].element_type is ElementType.HEADING2
    assert elements[2].special_style == "companyInfo"


def test_classification_failure_falls_back_to_paragraphs(monkeypatch, caplog):
    def _boom(lines):
        raise RuntimeError("classifier exploded")

    monkeypatch.setattr(header_detector, "classify", _boom)
    elements = detect_elements(RESUME_HEAD)

    assert [e.text for e in elements] == RESUME_HEAD
    assert all(e.element_type is ElementType.PARAGRAPH for e in elements)
    assert not any(e.special_style or e.is_header for e in elements)
    assert "falling back to paragraphs" in caplog.text
