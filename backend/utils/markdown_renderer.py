"""
Markdown-subset renderer for chat message bodies.

Supports exactly four constructs, each confined to a single line:
``# `` headings, ``## `` subheadings, ``**bold**`` and ``*italic*`` spans.
Blank lines become line breaks. There is no nesting and no escaping.
"""

import re
from html import escape

from schemas.rendering import (
    Block,
    HeadingBlock,
    LineBreakBlock,
    ParagraphBlock,
    TextSegment,
)

HEADING_1_PREFIX = "# "
HEADING_2_PREFIX = "## "

# Bold is tried before italic at every position; both are non-greedy.
EMPHASIS_PATTERN = re.compile(r"(?P<bold>\*\*.*?\*\*)|(?P<italic>\*.*?\*)")


def split_emphasis(line: str) -> list[TextSegment]:
    """Split one line into text, bold and italic segments in original order."""
    segments: list[TextSegment] = []
    literal_start = 0

    for match in EMPHASIS_PATTERN.finditer(line):
        if match.group("bold") is not None:
            style, inner = "bold", match.group("bold")[2:-2]
        else:
            style, inner = "italic", match.group("italic")[1:-1]

        if match.start() > literal_start:
            segments.append(TextSegment(text=line[literal_start:match.start()]))
        # "**" or "****": delimiters are consumed, no empty segment is emitted
        if inner:
            segments.append(TextSegment(style=style, text=inner))
        literal_start = match.end()

    if literal_start < len(line):
        segments.append(TextSegment(text=line[literal_start:]))

    return segments


def render_line(line: str) -> Block:
    if line.startswith(HEADING_1_PREFIX):
        return HeadingBlock(level=1, text=line[len(HEADING_1_PREFIX):])
    if line.startswith(HEADING_2_PREFIX):
        return HeadingBlock(level=2, text=line[len(HEADING_2_PREFIX):])
    if not line.strip():
        return LineBreakBlock()
    return ParagraphBlock(segments=split_emphasis(line))


def render(text: str) -> list[Block]:
    """
    Convert a message body into display blocks, one block per line.

    Args:
        text: Raw message content

    Returns:
        List of heading, paragraph and line-break blocks
    """
    return [render_line(line) for line in text.split("\n")]


def render_html(text: str) -> str:
    """Render a message body to an HTML fragment (all text is escaped)."""
    parts: list[str] = []
    for block in render(text):
        if isinstance(block, HeadingBlock):
            parts.append(f"<h{block.level}>{escape(block.text)}</h{block.level}>")
        elif isinstance(block, LineBreakBlock):
            parts.append("<br>")
        else:
            inline = []
            for segment in block.segments:
                if segment.style == "bold":
                    inline.append(f"<strong>{escape(segment.text)}</strong>")
                elif segment.style == "italic":
                    inline.append(f"<em>{escape(segment.text)}</em>")
                else:
                    inline.append(escape(segment.text))
            parts.append(f"<p>{''.join(inline)}</p>")
    return "\n".join(parts)
