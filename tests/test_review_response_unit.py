from __future__ import annotations

import json

from pipeline.review_response import extract_json_block, parse_review_response


def _payload(**overrides):
    payload = {
        "correctedText": "職務経歴書\n営業事務リーダー",
        "designInfo": {
            "fonts": ["Noto Sans JP"],
            "layout": {"pageCount": 2, "margins": {"top": "20px", "right": "20px", "bottom": "20px", "left": "20px"}},
            "styles": {"heading1": {"fontSize": "24px", "fontWeight": "700"}},
            "cssRules": [{"selector": "h1", "properties": {"color": "#123456"}}],
        },
    }
    payload.update(overrides)
    return payload


def test_fenced_json_block():
    response = "添削結果です。\n```json\n" + json.dumps(_payload(), ensure_ascii=False) + "\n```\n以上"
    parsed = parse_review_response(response)

    assert parsed.corrected_text == "職務経歴書\n営業事務リーダー"
    assert parsed.design_info is not None
    assert parsed.design_info.styles["heading1"].font_size == "24px"
    assert parsed.design_info.layout.page_count == 2
    assert parsed.design_info.css_rules[0].selector == "h1"
    assert parsed.raw_response == response


def test_unlabelled_fence_and_bare_object():
    body = json.dumps({"correctedText": "営業事務"}, ensure_ascii=False)

    assert parse_review_response(f"```\n{body}\n```").corrected_text == "営業事務"
    assert parse_review_response(f"Here you go: {body}").corrected_text == "営業事務"


def test_extract_json_block_prefers_json_fence():
    response = '```\n{"a": 1}\n```\n```json\n{"b": 2}\n```'
    assert extract_json_block(response) == '{"b": 2}'
    assert extract_json_block("no json here") == "no json here"


def test_plain_text_falls_back_to_raw(caplog):
    parsed = parse_review_response("職務経歴書\n営業事務リーダー")

    assert parsed.corrected_text == "職務経歴書\n営業事務リーダー"
    assert parsed.design_info is None
    assert "not valid JSON" in caplog.text


def test_non_object_json_falls_back_to_raw():
    parsed = parse_review_response("[1, 2, 3]")
    assert parsed.corrected_text == "[1, 2, 3]"
    assert parsed.design_info is None


def test_invalid_design_info_is_dropped(caplog):
    response = json.dumps(_payload(designInfo={"styles": "not a mapping"}), ensure_ascii=False)
    parsed = parse_review_response(response)

    assert parsed.corrected_text == "職務経歴書\n営業事務リーダー"
    assert parsed.design_info is None
    assert "Ignoring invalid designInfo" in caplog.text


def test_missing_corrected_text_is_empty():
    parsed = parse_review_response('{"designInfo": {}}')
    assert parsed.corrected_text == ""
    assert parsed.design_info is not None
    assert parsed.design_info.styles == {}
