"""Gradio interface for the side-by-side resume comparison."""
from __future__ import annotations

import tempfile
from typing import Optional, Tuple

import gradio as gr

from comparison.models import ComparisonResult
from config.settings import settings
from export.html_exporter import export_html
from export.json_exporter import export_json
from export.markdown_exporter import export_markdown
from export.text_exporter import export_text
from pipeline.compare_documents import compare_documents
from pipeline.review_response import parse_review_response
from utils.logging import logger
from visualization.diff_renderer import DIFF_CSS, render_document
from visualization.styles import DesignInfo


_LEGEND_HTML = """
<div style="display: flex; gap: 16px; justify-content: center;">
  <span><span class="diff-added">&nbsp;&nbsp;&nbsp;&nbsp;</span> 追加・修正された内容</span>
  <span><span class="diff-removed">&nbsp;&nbsp;&nbsp;&nbsp;</span> 削除された内容</span>
</div>
"""


def render_panels(
    result: Optional[ComparisonResult],
    design_info: Optional[DesignInfo],
    show_diff: bool,
) -> Tuple[str, str]:
    """HTML for the original and corrected panels."""
    if result is None:
        return "", ""
    return (
        render_document(result.original, "original", design_info, show_diff),
        render_document(result.corrected, "corrected", design_info, show_diff),
    )


def run_comparison(
    original_text: str,
    corrected_text: str,
    review_response: str,
    threshold: float,
    show_diff: bool,
):
    """
    Compare the two texts and render both panels.

    A non-empty ``review_response`` (raw reviewer JSON) takes precedence
    over ``corrected_text`` and may carry design info for styling.
    """
    design_info: Optional[DesignInfo] = None
    if review_response and review_response.strip():
        parsed = parse_review_response(review_response)
        corrected_text = parsed.corrected_text
        design_info = parsed.design_info

    if not (original_text or "").strip() and not (corrected_text or "").strip():
        return "", "", {}, "### Enter the original and corrected text", None, None

    result = compare_documents(original_text or "", corrected_text or "", threshold=threshold)
    original_html, corrected_html = render_panels(result, design_info, show_diff)
    summary = result.summary
    status = (
        f"### {summary['matched']} matched ({summary['modified']} modified), "
        f"{summary['removed']} removed, {summary['added']} added"
    )
    return original_html, corrected_html, summary, status, result, design_info


def export_json_handler(result: Optional[ComparisonResult]) -> str:
    """Export comparison result as JSON."""
    if not result:
        return "No comparison result available."
    try:
        with tempfile.NamedTemporaryFile(suffix=".json", delete=False) as f:
            path = f.name
        output_path = export_json(result, path)
        return str(output_path)
    except Exception as exc:
        logger.exception("JSON export failed")
        return f"Export failed: {exc}"


def export_html_handler(result: Optional[ComparisonResult], design_info: Optional[DesignInfo]) -> str:
    """Export the corrected document as HTML."""
    if not result:
        return "No comparison result available."
    try:
        with tempfile.NamedTemporaryFile(suffix=".html", delete=False) as f:
            path = f.name
        output_path = export_html(result, path, side="corrected", design_info=design_info)
        return str(output_path)
    except Exception as exc:
        logger.exception("HTML export failed")
        return f"Export failed: {exc}"


def export_markdown_handler(result: Optional[ComparisonResult]) -> str:
    """Export the corrected document as Markdown."""
    if not result:
        return "No comparison result available."
    try:
        with tempfile.NamedTemporaryFile(suffix=".md", delete=False) as f:
            path = f.name
        output_path = export_markdown(result, path, side="corrected")
        return str(output_path)
    except Exception as exc:
        logger.exception("Markdown export failed")
        return f"Export failed: {exc}"


def export_text_handler(result: Optional[ComparisonResult]) -> str:
    """Export the corrected document as plain text."""
    if not result:
        return "No comparison result available."
    try:
        with tempfile.NamedTemporaryFile(suffix=".txt", delete=False) as f:
            path = f.name
        output_path = export_text(result, path, side="corrected")
        return str(output_path)
    except Exception as exc:
        logger.exception("Text export failed")
        return f"Export failed: {exc}"


def build_comparison_interface() -> gr.Blocks:
    """Build the Gradio Blocks app."""
    with gr.Blocks(title="職務経歴書の比較") as demo:
        gr.Markdown("# 職務経歴書の比較")

        comparison_result = gr.State(None)
        design_info_state = gr.State(None)

        with gr.Row():
            original_input = gr.Textbox(label="オリジナル", lines=12)
            corrected_input = gr.Textbox(label="添削済み", lines=12)

        with gr.Accordion("Reviewer response (JSON)", open=False):
            review_input = gr.Textbox(label="Raw reviewer response", lines=6)

        with gr.Row():
            threshold = gr.Slider(
                minimum=0.0,
                maximum=1.0,
                step=0.01,
                value=settings.similarity_threshold,
                label="Similarity threshold",
            )
            show_diff = gr.Checkbox(label="変更を表示", value=True)
            compare_btn = gr.Button("Compare", variant="primary")

        status = gr.Markdown("### Ready to compare documents")

        with gr.Row():
            with gr.Column():
                gr.Markdown("### オリジナル")
                original_panel = gr.HTML()
            with gr.Column():
                gr.Markdown("### 添削済み")
                corrected_panel = gr.HTML()

        gr.HTML(f"<style>{DIFF_CSS}</style>{_LEGEND_HTML}")
        summary_panel = gr.JSON(label="Summary")

        with gr.Row():
            export_json_btn = gr.Button("Export JSON")
            export_html_btn = gr.Button("Export HTML")
            export_md_btn = gr.Button("Export Markdown")
            export_txt_btn = gr.Button("Export Text")

        compare_btn.click(
            run_comparison,
            inputs=[original_input, corrected_input, review_input, threshold, show_diff],
            outputs=[original_panel, corrected_panel, summary_panel, status, comparison_result, design_info_state],
        )

        show_diff.change(
            render_panels,
            inputs=[comparison_result, design_info_state, show_diff],
            outputs=[original_panel, corrected_panel],
        )

        export_json_btn.click(export_json_handler, inputs=[comparison_result], outputs=[status])
        export_html_btn.click(
            export_html_handler,
            inputs=[comparison_result, design_info_state],
            outputs=[status],
        )
        export_md_btn.click(export_markdown_handler, inputs=[comparison_result], outputs=[status])
        export_txt_btn.click(export_text_handler, inputs=[comparison_result], outputs=[status])

    return demo
