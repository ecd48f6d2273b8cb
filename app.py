"""Entry point for the resume comparison Gradio app."""
from __future__ import annotations

from config.settings import settings
from utils.logging import configure_logging, logger
from visualization.gradio_ui import build_comparison_interface


configure_logging()


def main() -> None:
    """Launch the Gradio application."""
    logger.info("Starting resume comparison app")
    logger.info(
        "Settings: title=%s, threshold=%.2f",
        settings.document_title,
        settings.similarity_threshold,
    )

    interface = build_comparison_interface()
    interface.launch(
        server_name="0.0.0.0",
        server_port=7860,
        share=False,
    )


if __name__ == "__main__":
    main()
