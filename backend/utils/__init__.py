"""Backend utility modules."""

from utils.markdown_renderer import render, render_html
from utils.message_converter import MessageConverter
from utils.reference_extractor import (
    DEFAULT_REFERENCES,
    ExtractedReply,
    apply_default_references,
    extract_references,
)

__all__ = [
    "DEFAULT_REFERENCES",
    "ExtractedReply",
    "MessageConverter",
    "apply_default_references",
    "extract_references",
    "render",
    "render_html",
]
