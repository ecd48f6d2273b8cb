"""Export module for JSON, HTML, Markdown and plain-text outputs."""
from export.html_exporter import export_html
from export.json_exporter import export_json
from export.markdown_exporter import export_markdown
from export.text_exporter import export_text

__all__ = ["export_json", "export_html", "export_markdown", "export_text"]
