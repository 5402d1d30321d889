"""
Semantic contracts for the document interview system.

This module defines immutable data structures passed between modules.
Apart from the request-payload factories, they carry no behaviour.

Design principles:
- Frozen dataclasses (immutable after creation)
- Offsets are only meaningful against the exact text they came from
- Request factories validate shape and raise ValidationError; nothing else does

Contents:
- BlankField: One located, typed gap in a document
- FieldLocator: Target of a single substitution, as echoed back by a client
- InterviewState: Caller-owned interview progress for the blank-driven flow
- normalize_responses(): Validate an ordered question -> answer mapping

Usage:
    from docinterview.contracts import BlankField, FieldLocator, InterviewState
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from docinterview.errors import ValidationError


@dataclass(frozen=True)
class BlankField:
    """
    Immutable descriptor for one blank located by the Field Scanner.

    Identity is (position, length, token). The context window is derived
    data used for classification and question phrasing only.

    Attributes:
        token: Literal matched text, e.g. '___', '[blank]', 'PETITION NO. ___'
        position: 0-based start offset into the scanned text
        length: len(token)
        context: Text window around the token (radius set by the scanner)
        type: Semantic tag, a FieldType value
        pattern: Name of the lexical pattern that produced the match.
            Overlapping patterns each produce their own BlankField.

    Examples:
        >>> field = BlankField(token='___', position=6, length=3,
        ...                    context='Name: ___, Age: ___', type='general',
        ...                    pattern='underscore')
        >>> field.end
        9
    """
    token: str
    position: int
    length: int
    context: str
    type: str
    pattern: str = "underscore"

    @property
    def end(self) -> int:
        """Exclusive end offset of the token"""
        return self.position + self.length

    def to_dict(self) -> Dict[str, Any]:
        """
        JSON form sent to clients as blankContext.

        'blank' mirrors 'token' so clients can echo either key back
        as the locator for a later update.
        """
        return {
            'token': self.token,
            'blank': self.token,
            'position': self.position,
            'length': self.length,
            'context': self.context,
            'type': str(getattr(self.type, 'value', self.type)),
            'pattern': self.pattern,
        }


@dataclass(frozen=True)
class FieldLocator:
    """
    Where to apply one answer.

    Any combination of attributes may be present; the Section Updater decides
    whether they still resolve to exactly one blank in the current text.

    Attributes:
        position: Start offset from the scan the client answered
        length: Token length from that scan
        token: Expected literal at that offset
        context: Context window from that scan, used when offsets are stale
    """
    position: Optional[int] = None
    length: Optional[int] = None
    token: Optional[str] = None
    context: Optional[str] = None

    @property
    def has_offsets(self) -> bool:
        return self.position is not None and self.length is not None

    @staticmethod
    def from_payload(payload: Any) -> "FieldLocator":
        """
        Build a locator from a client's questionContext.

        Accepts the dict produced by BlankField.to_dict(). A bare string is
        treated as a context window.

        Args:
            payload: dict or str from the request body

        Returns:
            FieldLocator

        Raises:
            ValidationError: If payload is empty, of an unsupported type,
                has non-integer offsets, non-string token or context,
                or carries neither offsets nor context
        """
        if not payload:
            raise ValidationError("questionContext is required")

        if isinstance(payload, str):
            return FieldLocator(context=payload)

        if not isinstance(payload, Mapping):
            raise ValidationError(
                f"questionContext must be an object, got {type(payload).__name__}"
            )

        position = _optional_int(payload.get('position'), 'position')
        length = _optional_int(payload.get('length'), 'length')
        token = payload.get('token') or payload.get('blank') or None
        context = payload.get('context') or None

        if token is not None and not isinstance(token, str):
            raise ValidationError("questionContext token must be a string")
        if context is not None and not isinstance(context, str):
            raise ValidationError("questionContext context must be a string")

        if token is not None and length is None and position is not None:
            length = len(token)

        locator = FieldLocator(
            position=position,
            length=length,
            token=token,
            context=context
        )

        if not locator.has_offsets and locator.context is None:
            raise ValidationError(
                "questionContext must include position/length or context"
            )

        return locator


@dataclass(frozen=True)
class InterviewState:
    """
    Caller-owned progress for the blank-driven interview.

    Passed in on every call and never cached server side. The field list is
    always re-derived from document_text because substitutions shift offsets.

    Attributes:
        document_text: Current version of the document
        current_question_index: 0-based cursor into the field list of
            document_text
    """
    document_text: str
    current_question_index: int = 0

    @staticmethod
    def from_payload(payload: Mapping[str, Any]) -> "InterviewState":
        """
        Build state from a scan-and-ask request body.

        Raises:
            ValidationError: documentText missing or not a string, or
                currentQuestionIndex not a non-negative integer
        """
        document_text = payload.get('documentText')
        if document_text is None:
            raise ValidationError("Missing required field: documentText")
        if not isinstance(document_text, str):
            raise ValidationError("documentText must be a string")

        index = payload.get('currentQuestionIndex')
        if index is None:
            index = 0
        index = _optional_int(index, 'currentQuestionIndex')
        if index < 0:
            raise ValidationError("currentQuestionIndex must be >= 0")

        return InterviewState(document_text=document_text, current_question_index=index)


def normalize_responses(responses: Any, field_name: str = "responses") -> Dict[str, str]:
    """
    Validate a question -> answer mapping, keeping insertion order.

    Args:
        responses: Mapping from the request body (None is treated as empty)
        field_name: Request key, used in error messages

    Returns:
        dict: Same pairs, in the same order, with values as strings

    Raises:
        ValidationError: If responses is not a mapping
    """
    if responses is None:
        return {}
    if not isinstance(responses, Mapping):
        raise ValidationError(f"{field_name} must be an object of question/answer pairs")

    return {
        str(question): "" if answer is None else str(answer)
        for question, answer in responses.items()
    }


def _optional_int(value: Any, name: str) -> Optional[int]:
    """Coerce an integer-like request value, rejecting bools and fractions"""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ValidationError(f"{name} must be an integer") from None
    raise ValidationError(f"{name} must be an integer")
