"""
Field Type Registry

Defines the semantic tags attached to blank fields and the canned questions
available for some of them.

Type Classification:
- Classifier types: produced by the field classifier from surrounding text
- Canned-only types: have a fixed question but are never produced by the
  classifier (spouse_name, age, occupation)

Canned Questions:
- CANNED_QUESTIONS maps a field type to one fixed interrogative sentence
- Context content never changes the canned text
- Types without an entry (general, petition_number, versus) are phrased by
  the generation service instead
"""

from enum import Enum
from typing import Dict, Optional


class FieldType(str, Enum):
    """
    Semantic tag for a blank field.

    String-based so values serialize directly into JSON responses.
    """
    # Classifier output
    PETITION_NUMBER = "petition_number"
    FATHER_NAME = "father_name"
    MOTHER_NAME = "mother_name"
    VERSUS = "versus"
    ADDRESS = "address"
    GENERAL = "general"

    # Canned-question only
    SPOUSE_NAME = "spouse_name"
    AGE = "age"
    OCCUPATION = "occupation"


# Closed set the classifier may return
CLASSIFIER_TYPES = frozenset({
    FieldType.PETITION_NUMBER,
    FieldType.FATHER_NAME,
    FieldType.MOTHER_NAME,
    FieldType.VERSUS,
    FieldType.ADDRESS,
    FieldType.GENERAL,
})


CANNED_QUESTIONS: Dict[FieldType, str] = {
    FieldType.FATHER_NAME: "What is the petitioner's father's name?",
    FieldType.MOTHER_NAME: "What is the petitioner's mother's name?",
    FieldType.SPOUSE_NAME: "What is the petitioner's spouse's name?",
    FieldType.ADDRESS: "What is the complete address?",
    FieldType.AGE: "What is the age of the person?",
    FieldType.OCCUPATION: "What is the person's occupation?",
}


def get_canned_question(field_type: str) -> Optional[str]:
    """
    Look up the canned question for a field type.

    Args:
        field_type: FieldType member or its string value

    Returns:
        str: Fixed question text, or None when the type has no canned question
        (including unrecognized type strings)
    """
    try:
        return CANNED_QUESTIONS.get(FieldType(field_type))
    except ValueError:
        return None


def has_canned_question(field_type: str) -> bool:
    """Check whether a field type is served by the fast path"""
    return get_canned_question(field_type) is not None
