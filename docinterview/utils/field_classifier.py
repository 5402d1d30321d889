"""
Field Classifier - Semantic typing of blank fields

Responsibilities:
- Assign exactly one FieldType to a blank from its surrounding text
- Single source of truth for keyword rules

Design principles:
- Pure function (no state)
- First match wins; rule order is significant and must not change
- Total: every input maps to some type, defaulting to GENERAL
"""

from typing import Optional, Tuple

from docinterview.utils.field_types import FieldType

# Ordered (keywords, type) rules. Earlier rules shadow later ones:
# "father's address" is father_name, not address.
CLASSIFICATION_RULES: Tuple[Tuple[Tuple[str, ...], FieldType], ...] = (
    (("petition no",), FieldType.PETITION_NUMBER),
    (("father",), FieldType.FATHER_NAME),
    (("mother",), FieldType.MOTHER_NAME),
    (("vs", "versus"), FieldType.VERSUS),
    (("address", "residing"), FieldType.ADDRESS),
)


def classify_context(context: Optional[str]) -> FieldType:
    """
    Classify a blank by the text around it

    Matching is case-insensitive substring search, so "vs" also fires
    inside longer words.

    Args:
        context: Context window around the blank (may be None or empty)

    Returns:
        FieldType: First matching rule's type, or FieldType.GENERAL

    Examples:
        >>> classify_context("PETITION NO. ___ of 2024")
        <FieldType.PETITION_NUMBER: 'petition_number'>

        >>> classify_context("Name: ___, Age: ___")
        <FieldType.GENERAL: 'general'>
    """
    if not context:
        return FieldType.GENERAL

    lowered = context.lower()
    for keywords, field_type in CLASSIFICATION_RULES:
        if any(keyword in lowered for keyword in keywords):
            return field_type

    return FieldType.GENERAL
