"""Draft validation rules.

Turns loose user input into a normalized ValidatedDraft, or rejects it
with a ValidationError naming the offending field.
"""

import re

from .models import Draft, ValidatedDraft, ValidationError

TITLE_REQUIRED = "Title is required"
YEAR_NOT_WHOLE = "Year must be a whole number"

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")


class Validator:
    """Accepts or rejects drafts.

    Pure function over domain objects. All methods are static as the
    class carries no state.
    """

    @staticmethod
    def validate(draft: Draft) -> ValidatedDraft:
        """Normalize a draft.

        Raises:
            ValidationError: On a blank title or a year that is not a
                whole number.
        """
        title = Validator._text(draft.title)
        if not title:
            raise ValidationError("title", TITLE_REQUIRED)

        return ValidatedDraft(
            title=title,
            author=Validator._text(draft.author),
            year=Validator.parse_year(draft.year),
        )

    @staticmethod
    def parse_year(raw: str | int | float | None) -> int | None:
        """Parse a raw year value.

        Empty input means absent. Anything else must be an integer,
        written as digits with an optional sign, or an integral number.
        """
        if raw is None:
            return None
        if isinstance(raw, bool):
            raise ValidationError("year", YEAR_NOT_WHOLE)
        if isinstance(raw, int):
            return raw
        if isinstance(raw, float):
            if not raw.is_integer():
                raise ValidationError("year", YEAR_NOT_WHOLE)
            return int(raw)
        if isinstance(raw, str):
            text = raw.strip()
            if not text:
                return None
            if not _INTEGER_PATTERN.fullmatch(text):
                raise ValidationError("year", YEAR_NOT_WHOLE)
            return int(text)
        raise ValidationError("year", YEAR_NOT_WHOLE)

    @staticmethod
    def _text(value: object) -> str:
        if value is None:
            return ""
        return str(value).strip()
