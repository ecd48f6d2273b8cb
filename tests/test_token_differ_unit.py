from __future__ import annotations

import pytest

from comparison import token_differ
from comparison.models import DiffPart, DocumentElement
from comparison.token_differ import apply_token_diffs, diff_tokens, split_sides


def _texts(parts, kind):
    return "".join(p.text for p in parts if p.kind == kind)


def _matched_pair(original_text, corrected_text):
    original = [DocumentElement(original_text, matched_index=0)]
    corrected = [DocumentElement(corrected_text, matched_index=0)]
    return original, corrected


def test_prefix_extension_is_an_addition():
    parts = diff_tokens("営業事務", "営業事務リーダー")
    assert parts == [DiffPart("営業事務", "unchanged"), DiffPart("リーダー", "added")]


def test_suffix_extension_is_an_addition():
    parts = diff_tokens("受発注管理", "受発注管理システムの刷新")
    assert parts == [DiffPart("受発注管理", "unchanged"), DiffPart("システムの刷新", "added")]


def test_number_replacement_and_extension():
    original, corrected = _matched_pair("売上を10%改善", "売上を20%改善し顧客満足度も向上")

    assert apply_token_diffs(original, corrected) == 0

    orig_parts, corr_parts = original[0].diff_parts, corrected[0].diff_parts
    assert original[0].reconstructed_text() == "売上を10%改善"
    assert corrected[0].reconstructed_text() == "売上を20%改善し顧客満足度も向上"
    assert _texts(orig_parts, "removed") == "10"
    assert _texts(corr_parts, "added") == "20し顧客満足度も向上"
    assert {p.kind for p in orig_parts} <= {"unchanged", "removed"}
    assert {p.kind for p in corr_parts} <= {"unchanged", "added"}
    assert corr_parts[0] == DiffPart("売上を", "unchanged")


def test_replacement_emits_removed_before_added():
    kinds = [p.kind for p in diff_tokens("Excel 2級", "Excel 1級")]
    assert kinds == ["unchanged", "removed", "added", "unchanged"]


def test_word_insertion_keeps_words_whole():
    original, corrected = _matched_pair("Managed sales data", "Managed the sales data")
    apply_token_diffs(original, corrected)

    assert corrected[0].reconstructed_text() == "Managed the sales data"
    assert _texts(corrected[0].diff_parts, "added").strip() == "the"
    assert original[0].diff_parts == [DiffPart("Managed sales data", "unchanged")]


def test_identical_texts_are_one_unchanged_span():
    assert diff_tokens("受発注管理、在庫管理", "受発注管理、在庫管理") == [
        DiffPart("受発注管理、在庫管理", "unchanged")
    ]


def test_adjacent_spans_are_merged():
    parts = diff_tokens("", "顧客 満足度")
    assert parts == [DiffPart("顧客 満足度", "added")]


@pytest.mark.parametrize(
    "original_text,corrected_text",
    [
        ("営業部のアシスタント業務", "営業部のアシスタント業務を統括"),
        ("売上データの集計・分析", "売上データの集計と分析"),
        ("MOS Excel Expert（20XX年取得）", "MOS Excel Expert 2019（20XX年取得）"),
        ("- 受発注管理、在庫管理", "- 在庫管理、受発注管理"),
    ],
)
def test_sides_reconstruct_their_texts(original_text, corrected_text):
    orig_side, corr_side = split_sides(diff_tokens(original_text, corrected_text))
    assert "".join(p.text for p in orig_side) == original_text
    assert "".join(p.text for p in corr_side) == corrected_text


def test_unmatched_elements_are_left_alone():
    original = [DocumentElement("A", diff_parts=[DiffPart("A", "removed")])]
    corrected = [DocumentElement("B", diff_parts=[DiffPart("B", "added")])]

    assert apply_token_diffs(original, corrected) == 0
    assert original[0].diff_parts == [DiffPart("A", "removed")]
    assert corrected[0].diff_parts == [DiffPart("B", "added")]


def test_failed_pair_falls_back_to_whole_spans(monkeypatch, caplog):
    real_diff = token_differ.diff_tokens

    def _flaky(a, b):
        if a == "壊れる行":
            raise ValueError("cannot diff")
        return real_diff(a, b)

    monkeypatch.setattr(token_differ, "diff_tokens", _flaky)
    original = [DocumentElement("壊れる行", matched_index=0), DocumentElement("営業事務", matched_index=1)]
    corrected = [DocumentElement("壊れた行", matched_index=0), DocumentElement("営業事務リーダー", matched_index=1)]

    assert apply_token_diffs(original, corrected) == 1

    assert original[0].diff_parts == [DiffPart("壊れる行", "removed")]
    assert corrected[0].diff_parts == [DiffPart("壊れた行", "added")]
    assert corrected[1].diff_parts == [DiffPart("営業事務", "unchanged"), DiffPart("リーダー", "added")]
    assert "Token diff failed" in caplog.text


def test_out_of_range_match_index_is_skipped(caplog):
    original = [DocumentElement("営業事務", matched_index=3, diff_parts=[DiffPart("営業事務")])]

    assert apply_token_diffs(original, []) == 0
    assert original[0].diff_parts == [DiffPart("営業事務")]
    assert "out of range" in caplog.text
