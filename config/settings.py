"""Configuration management for classification cutoffs, keywords, and matching thresholds."""
from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Alignment
    similarity_threshold: float = Field(
        default=0.6,
        description="Minimum edit-distance similarity (0.0-1.0) for pairing original and corrected elements",
    )

    # Document header
    document_title: str = Field(
        default="職務経歴書",
        description="Known top-level document title that anchors the title/date/name header",
    )
    header_scan_lines: int = Field(
        default=5,
        description="Number of leading lines searched for the document title",
    )

    # Heading1 heuristics
    heading1_caps_max_length: int = Field(
        default=30,
        description="ALL-CAPS lines shorter than this are treated as top-level headings",
    )
    heading1_caps_min_ratio: float = Field(
        default=0.6,
        description="Share of non-space characters that must be uppercase letters for an ALL-CAPS heading",
    )
    heading1_isolated_max_length: int = Field(
        default=50,
        description="Blank-surrounded lines without a period shorter than this are top-level headings",
    )

    # Heading2 heuristics
    heading2_keyword_max_length: int = Field(
        default=80,
        description="Lines starting with an organization keyword must be shorter than this to be headings",
    )
    heading2_label_max_length: int = Field(
        default=20,
        description="Maximum label length inside a bracket-wrapped section label",
    )

    # Heading3 heuristics
    heading3_list_min_content: int = Field(
        default=10,
        description="Minimum content length after a numbering glyph for a sub-heading",
    )
    heading3_colon_max_length: int = Field(
        default=100,
        description="Colon-terminated lines shorter than this are sub-headings",
    )

    # Normalization passes
    repeated_heading2_min_length: int = Field(
        default=20,
        description="A second consecutive section heading at least this long is demoted to a paragraph",
    )
    colon_subheading_max_length: int = Field(
        default=30,
        description="Short colon-bearing paragraphs after a heading below this length become sub-headings",
    )

    # Keyword tables
    organization_keywords: List[str] = Field(
        default_factory=lambda: [
            "株式会社",
            "有限会社",
            "合同会社",
            "一般社団法人",
            "職務要約",
            "職務経歴",
            "職務内容",
            "保有資格",
            "自己PR",
            "活かせる経験",
            "基本情報",
        ],
        description="Organization and role prefixes that mark a section heading",
    )
    project_keywords: List[str] = Field(
        default_factory=lambda: ["プロジェクト", "案件", "担当業務", "業務内容", "Project", "Assignment"],
        description="Prefixes marking a project or assignment sub-heading",
    )
    employment_status_keywords: List[str] = Field(
        default_factory=lambda: ["現在", "在籍", "入社", "退社", "退職", "正社員", "契約社員", "派遣社員"],
        description="Keywords that identify a company heading line",
    )
    evaluation_markers: List[str] = Field(
        default_factory=lambda: ["評価：", "評価:", "※", "Evaluation:"],
        description="Line prefixes that mark an evaluation quote",
    )
    section_marker_glyphs: str = Field(
        default="■□◆◇●○▼▽★☆",
        description="Glyphs that open a section marker line",
    )

    class Config:
        env_prefix = "RESUMEDIFF_"
        env_file = ".env"
        env_file_encoding = "utf-8"


def get_settings() -> Settings:
    """Return a cached settings instance."""
    return _get_settings()


@lru_cache()
def _get_settings() -> Settings:
    return Settings()


settings = get_settings()
