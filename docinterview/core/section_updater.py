"""
Section Updater - Substitute one answer into the document

Responsibilities:
- Re-resolve a client's locator against the current document text
- Replace the blank marker inside the resolved span with the answer
- Reject missing inputs, stale offsets, filled blanks and ambiguous contexts

Design principles:
- All-or-nothing: the input text is returned untouched or patched at exactly
  one span; every character outside that span is preserved
- Not idempotent: once filled, the same locator no longer resolves
- Prefixes that are part of a match ("PETITION NO. ", "Father's name: ",
  "of ") are kept; only the marker itself is replaced
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from docinterview.contracts import FieldLocator
from docinterview.core.field_scanner import MARKER_PATTERN, is_blank_token
from docinterview.errors import ResolutionError, ValidationError

logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = (
    "Could not determine section to update: userInput, questionContext and documentText are required"
)


@dataclass(frozen=True)
class UpdateOutcome:
    """
    Attributes:
        text: Updated document text
        start: Start offset of the replaced marker in the input text
        end: Exclusive end offset of the replaced marker in the input text
        replaced: Marker text that was removed
    """
    text: str
    start: int
    end: int
    replaced: str


class SectionUpdater:
    """Applies one answer to one blank"""

    def update(
        self,
        document_text: Optional[str],
        user_input: Optional[str],
        locator: Optional[FieldLocator]
    ) -> UpdateOutcome:
        """
        Replace the located blank with the user's answer

        Args:
            document_text: Current document text
            user_input: Answer to insert (surrounding whitespace is stripped)
            locator: Target blank, usually built from the scan the client answered

        Returns:
            UpdateOutcome with the new text and the replaced range

        Raises:
            ValidationError: Any input missing or empty, or the answer
                contains a blank marker
            ResolutionError: Locator does not resolve to exactly one blank
        """
        if not document_text or locator is None or not isinstance(user_input, str) or not user_input.strip():
            raise ValidationError(MISSING_INPUT_MESSAGE)
        if MARKER_PATTERN.search(user_input):
            raise ValidationError("Answer must not contain a blank marker")

        span_start, span_end = self._resolve(document_text, locator)
        span = document_text[span_start:span_end]

        # The marker is the trailing blank inside a prefixed match
        markers = list(MARKER_PATTERN.finditer(span))
        if not markers:
            raise ResolutionError("Could not determine section to update: target is not a blank")
        marker = markers[-1]

        start = span_start + marker.start()
        end = span_start + marker.end()
        answer = user_input.strip()

        updated = document_text[:start] + answer + document_text[end:]
        logger.info(f"Filled blank at {start}-{end} ({len(answer)} chars)")

        return UpdateOutcome(text=updated, start=start, end=end, replaced=marker.group(0))

    def _resolve(self, document_text: str, locator: FieldLocator) -> Tuple[int, int]:
        """
        Find the span the locator points at in the current text

        Offsets are tried first; the context window is the fallback for
        offsets shifted by an earlier substitution.
        """
        if locator.has_offsets:
            resolved = self._resolve_by_offsets(document_text, locator)
            if resolved is not None:
                return resolved
            logger.debug(f"Offsets {locator.position}+{locator.length} are stale")

        if locator.context:
            resolved = self._resolve_by_context(document_text, locator)
            if resolved is not None:
                return resolved

        raise ResolutionError(
            "Could not determine section to update: the blank was not found at the expected "
            "location (it may already be filled)"
        )

    @staticmethod
    def _resolve_by_offsets(document_text: str, locator: FieldLocator) -> Optional[Tuple[int, int]]:
        start = locator.position
        end = locator.position + locator.length
        if start < 0 or locator.length <= 0 or end > len(document_text):
            return None

        span = document_text[start:end]
        if locator.token is not None and span != locator.token:
            return None
        if not is_blank_token(span):
            return None

        return start, end

    @staticmethod
    def _resolve_by_context(document_text: str, locator: FieldLocator) -> Optional[Tuple[int, int]]:
        """Context must occur once and hold exactly one candidate blank"""
        occurrences = _find_all(document_text, locator.context)
        if len(occurrences) != 1:
            logger.debug(f"Context matched {len(occurrences)} times")
            return None
        context_start = occurrences[0]

        if locator.token is not None:
            if not is_blank_token(locator.token):
                return None
            candidates = [
                (offset, offset + len(locator.token))
                for offset in _find_all(locator.context, locator.token)
            ]
        else:
            candidates = [match.span() for match in MARKER_PATTERN.finditer(locator.context)]

        if len(candidates) != 1:
            logger.debug(f"Context holds {len(candidates)} candidate blanks")
            return None

        offset_start, offset_end = candidates[0]
        return context_start + offset_start, context_start + offset_end


def _find_all(haystack: str, needle: str) -> List[int]:
    """Start offsets of every (possibly overlapping) occurrence"""
    positions = []
    index = haystack.find(needle)
    while index != -1:
        positions.append(index)
        index = haystack.find(needle, index + 1)
    return positions
