from __future__ import annotations

import pytest

from comparison.similarity import edit_distance, similarity, tokenize


@pytest.mark.parametrize(
    "a,b,expected",
    [
        ("", "abc", 3),
        ("abc", "", 3),
        ("", "", 0),
        ("abc", "abc", 0),
        ("kitten", "sitting", 3),
        ("営業事務", "営業事務リーダー", 4),
        ("売上を10%改善", "売上を20%改善", 1),
    ],
)
def test_edit_distance(a, b, expected):
    assert edit_distance(a, b) == expected


def test_edit_distance_counts_code_points_not_bytes():
    # Each kana is one code point but three UTF-8 bytes.
    assert edit_distance("あいう", "あえう") == 1


@pytest.mark.parametrize(
    "a,b",
    [
        ("kitten", "sitting"),
        ("営業事務", "営業事務リーダー"),
        ("", "abc"),
        ("受発注管理", "受発注管理システムの刷新"),
    ],
)
def test_similarity_is_symmetric(a, b):
    assert similarity(a, b) == similarity(b, a)


@pytest.mark.parametrize("text", ["a", "職務経歴書", "MOS Excel Expert（20XX年取得）"])
def test_similarity_identity(text):
    assert similarity(text, text) == 1.0


def test_similarity_values():
    assert similarity("", "") == 1.0
    assert similarity("", "abc") == 0.0
    assert similarity("abc", "abd") == pytest.approx(2 / 3)
    assert similarity("営業事務", "営業事務リーダー") == pytest.approx(0.5)
    assert 0.0 <= similarity("abc", "xyz") <= 1.0


@pytest.mark.parametrize(
    "text",
    [
        "",
        "Managed  the sales\tdata.",
        "売上を10%改善し顧客満足度も向上",
        "  - 受発注管理、在庫管理\n",
        "MOS Excel Expert（20XX年取得）",
        "a_b c__d!?",
    ],
)
def test_tokenize_round_trip(text):
    assert "".join(tokenize(text)) == text


def test_tokenize_units():
    assert tokenize("Excel  2級") == ["Excel", "  ", "2", "級"]
    assert tokenize("売上を10%改善") == ["売", "上", "を", "10", "%", "改", "善"]
    assert tokenize("a, b") == ["a", ",", " ", "b"]
    assert tokenize("") == []
