from __future__ import annotations

from config.settings import Settings, get_settings, settings


def test_defaults():
    fresh = Settings()
    assert fresh.similarity_threshold == 0.6
    assert fresh.document_title == "職務経歴書"
    assert fresh.header_scan_lines == 5
    assert "株式会社" in fresh.organization_keywords
    assert "■" in fresh.section_marker_glyphs


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("RESUMEDIFF_SIMILARITY_THRESHOLD", "0.75")
    monkeypatch.setenv("RESUMEDIFF_PROJECT_KEYWORDS", '["案件", "Engagement"]')

    fresh = Settings()

    assert fresh.similarity_threshold == 0.75
    assert fresh.project_keywords == ["案件", "Engagement"]


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
    assert get_settings() is settings
