"""
Reference-block extraction for model replies.

The model is instructed to finish its answer with a line such as::

    REFERENCES: ["Indian Contract Act, 1872 - Section 10", "..."]

This module removes that block from the display text and returns the
citations separately. The array is read with a JSON decoder rather than a
bracket-matching regex, so brackets and escaped quotes inside citation
strings are handled.
"""

import json
import logging
import re
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

REFERENCES_MARKER = "REFERENCES:"

# First marker followed (after optional whitespace, newlines included) by an array
REFERENCES_BLOCK_START = re.compile(re.escape(REFERENCES_MARKER) + r"\s*(?=\[)")

DEFAULT_REFERENCES = (
    "Indian Penal Code (IPC) - General criminal law provisions",
    "Constitution of India - Fundamental Rights and Legal Framework",
    "Code of Civil Procedure (CPC) - Civil litigation procedures",
)

_decoder = json.JSONDecoder()


@dataclass
class ExtractedReply:
    """A model reply split into display text and citations."""

    display_text: str
    references: list[str] = field(default_factory=list)


def extract_references(raw_response: str) -> ExtractedReply:
    """
    Split a raw model reply into display text and references.

    Only the first ``REFERENCES:`` marker that is followed by ``[`` is
    consumed. A block that does not decode to a JSON array of strings is
    logged and ignored: the reply is returned unchanged with no references.

    Args:
        raw_response: The model reply text

    Returns:
        ExtractedReply with the trimmed display text and parsed references
    """
    match = REFERENCES_BLOCK_START.search(raw_response)
    if not match:
        return ExtractedReply(display_text=raw_response)

    try:
        parsed, block_end = _decoder.raw_decode(raw_response, match.end())
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse references: {e}")
        return ExtractedReply(display_text=raw_response)

    if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
        logger.error(
            f"Failed to parse references: expected a list of strings, got {parsed!r}"
        )
        return ExtractedReply(display_text=raw_response)

    display_text = (raw_response[:match.start()] + raw_response[block_end:]).strip()
    return ExtractedReply(display_text=display_text, references=parsed)


def apply_default_references(references: list[str]) -> list[str]:
    """Return the references, or the fixed default citations when there are none."""
    if references:
        return references
    return list(DEFAULT_REFERENCES)
