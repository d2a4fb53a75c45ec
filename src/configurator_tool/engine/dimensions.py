"""
Dimension inference from numeric answers.

Questions are free-form, so dimensions are found by key name: an exact key
match on any of a term set wins, otherwise the first answer whose key
contains one of the terms (case-insensitive). Only positive numbers count.
Several keys can match the same term set; the first one found is used.
"""
from dataclasses import dataclass

from .models import Answers

LENGTH_TERMS = ("length", "lengte")
WIDTH_TERMS = ("width", "breedte")
HEIGHT_TERMS = ("height", "hoogte")

# Checked in this order when deciding whether a key is a dimension
DIMENSION_TERM_SETS = (LENGTH_TERMS, WIDTH_TERMS, HEIGHT_TERMS)


@dataclass
class Dimensions:
    """Resolved dimensions in meters (0 when unknown)."""
    length: float = 0
    width: float = 0
    height: float = 0

    @property
    def area(self) -> float:
        """Prefer length × width, then length × height, then width × height."""
        if self.length > 0 and self.width > 0:
            return self.length * self.width
        if self.length > 0 and self.height > 0:
            return self.length * self.height
        if self.width > 0 and self.height > 0:
            return self.width * self.height
        return 0


def _positive_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def get_dimension_value(answers: Answers, terms: tuple[str, ...]) -> float:
    """Get the value for one dimension, exact key first, then substring."""
    for key in terms:
        value = answers.get(key)
        if _positive_number(value):
            return value

    for answer_key, value in answers.items():
        if not _positive_number(value):
            continue
        lower_key = answer_key.lower()
        for term in terms:
            if term.lower() in lower_key:
                return value

    return 0


def is_dimension_key(key: str) -> bool:
    """True when a question key names a length, width or height."""
    lower_key = key.lower()
    return any(term in lower_key for terms in DIMENSION_TERM_SETS for term in terms)


def infer_dimensions(answers: Answers) -> Dimensions:
    """Resolve length, width and height from the answers."""
    return Dimensions(
        length=get_dimension_value(answers, LENGTH_TERMS),
        width=get_dimension_value(answers, WIDTH_TERMS),
        height=get_dimension_value(answers, HEIGHT_TERMS),
    )
