"""
Interview Cursor - Linear selection over the scanned field list

Responsibilities:
- Pick the field at the caller's index, or declare the interview complete

Design principles:
- Stateless: the caller owns the index
- Linear: never skips a field. Conditional branching belongs to the
  template-driven flow's prompt, not here.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from docinterview.contracts import BlankField
from docinterview.errors import ValidationError


@dataclass(frozen=True)
class CursorPosition:
    """
    Outcome of a cursor selection

    Attributes:
        complete: True when index is past the last field
        index: Requested index
        total: Number of fields in the list
        field: Active field, None when complete
        remaining: Fields after the active one (0 when complete)
    """
    complete: bool
    index: int
    total: int
    field: Optional[BlankField] = None
    remaining: int = 0


class InterviewCursor:
    """Selects the active blank for a given interview index"""

    @staticmethod
    def select(fields: Sequence[BlankField], index: int) -> CursorPosition:
        """
        Args:
            fields: Ordered field list from FieldScanner.scan()
            index: 0-based interview index

        Returns:
            CursorPosition

        Raises:
            ValidationError: If index is negative
        """
        if index < 0:
            raise ValidationError("currentQuestionIndex must be >= 0")

        total = len(fields)
        if index >= total:
            return CursorPosition(complete=True, index=index, total=total)

        return CursorPosition(
            complete=False,
            index=index,
            total=total,
            field=fields[index],
            remaining=total - index - 1
        )
