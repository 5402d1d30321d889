"""
Field Scanner - Locate fillable blanks in document text

Responsibilities:
- Match every blank pattern independently across the whole text
- Pool matches from all patterns and order them by position
- Compute the context window for each match and classify it

Design principles:
- Stateless: every call rescans; nothing is cached between documents
- Deterministic: same text always yields the same ordered list
- Permissive: overlapping matches from different patterns are all kept.
  The interview index counts these duplicates, so no merge pass is applied.
- Never raises on string input; a document without blanks yields []
"""

import logging
import re
from typing import List, Pattern, Tuple

from docinterview.contracts import BlankField
from docinterview.utils.field_classifier import classify_context

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_RADIUS = 50

# Bare blank marker: 3+ underscores, [blank], or empty/whitespace parentheses
BLANK_MARKER = r"_{3,}|\[blank\]|\(\s*\)"

# (name, compiled pattern). Order only breaks ties between equal positions.
BLANK_PATTERNS: Tuple[Tuple[str, Pattern[str]], ...] = (
    ("underscore", re.compile(r"_{3,}")),
    ("blank_tag", re.compile(r"\[blank\]", re.IGNORECASE)),
    ("empty_parens", re.compile(r"\(\s*\)")),
    ("petition_no", re.compile(rf"PETITION NO\.\s*(?:{BLANK_MARKER})", re.IGNORECASE)),
    ("of_prefix", re.compile(rf"of\s*(?:{BLANK_MARKER})", re.IGNORECASE)),
    ("father_name", re.compile(rf"father['’]?s?\s+name\s*:\s*(?:{BLANK_MARKER})", re.IGNORECASE)),
)

MARKER_PATTERN = re.compile(BLANK_MARKER, re.IGNORECASE)


def context_window(text: str, position: int, length: int, radius: int) -> str:
    """
    Slice a symmetric window around a span, clamped to the text bounds

    Args:
        text: Full document text
        position: Span start
        length: Span length
        radius: Characters to include on each side

    Returns:
        str: text[max(0, position - radius) : min(len(text), position + length + radius)]
    """
    start = max(0, position - radius)
    end = min(len(text), position + length + radius)
    return text[start:end]


def is_blank_token(span: str) -> bool:
    """Check whether a span is, in its entirety, one of the blank patterns"""
    return any(pattern.fullmatch(span) for _, pattern in BLANK_PATTERNS)


class FieldScanner:
    """
    Finds blank fields in a document.

    Holds configuration only (context radius); safe to share across requests.
    """

    def __init__(self, context_radius: int = DEFAULT_CONTEXT_RADIUS):
        """
        Args:
            context_radius: Characters of context captured on each side of a blank

        Raises:
            ValueError: If context_radius is negative
        """
        if context_radius < 0:
            raise ValueError("context_radius must be >= 0")
        self.context_radius = context_radius

    def scan(self, document_text: str) -> List[BlankField]:
        """
        Produce the ordered blank field list for a document

        Args:
            document_text: Full document text

        Returns:
            List of BlankField sorted by position ascending. Entries at the same
            position keep the pattern order of BLANK_PATTERNS.
        """
        if not document_text:
            return []

        fields = []
        for name, pattern in BLANK_PATTERNS:
            # finditer always advances past zero-width matches
            for match in pattern.finditer(document_text):
                token = match.group(0)
                if not token:
                    continue

                position = match.start()
                context = context_window(document_text, position, len(token), self.context_radius)

                fields.append(BlankField(
                    token=token,
                    position=position,
                    length=len(token),
                    context=context,
                    type=classify_context(context).value,
                    pattern=name
                ))

        # sorted() is stable, so ties stay in pattern order
        fields = sorted(fields, key=lambda field: field.position)

        logger.debug(f"Scanned {len(document_text)} chars, found {len(fields)} blank fields")
        return fields

    def count(self, document_text: str) -> int:
        """Number of blank fields in a document"""
        return len(self.scan(document_text))
