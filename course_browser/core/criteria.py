from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict

from course_browser.core.exceptions import InvalidCriterion

MAX_RATING = 5.0
MIN_LEVEL = 1
MAX_LEVEL = 9


class FilterCategory(str, Enum):
    """
    The dimensions a course catalog can be filtered on.

    Declaration order is the canonical order used for descriptors,
    serialisation and display.
    """

    SUBJECT = "subject"
    RATING_MIN = "rating_min"
    PRICE_MAX = "price_max"
    LEVEL = "level"
    AVAILABILITY = "availability"

    def __str__(self) -> str:
        return self.value


class DeliveryMode(str, Enum):
    ONLINE = "online"
    IN_PERSON = "in-person"
    HYBRID = "hybrid"

    def __str__(self) -> str:
        return self.value


CATEGORY_ORDER = tuple(FilterCategory)


@dataclass(frozen=True)
class LevelRange:
    """
    Inclusive range of course levels (first digit of the course number,
    e.g. COMP1511 is level 1).
    """

    low: int
    high: int

    def __post_init__(self) -> None:
        for bound in (self.low, self.high):
            if isinstance(bound, bool) or not isinstance(bound, int):
                raise InvalidCriterion(
                    FilterCategory.LEVEL, (self.low, self.high), "level bounds must be integers"
                )
            if not MIN_LEVEL <= bound <= MAX_LEVEL:
                raise InvalidCriterion(
                    FilterCategory.LEVEL,
                    (self.low, self.high),
                    f"levels must be between {MIN_LEVEL} and {MAX_LEVEL}",
                )
        if self.low > self.high:
            raise InvalidCriterion(
                FilterCategory.LEVEL, (self.low, self.high), "low bound is above high bound"
            )

    def contains(self, level: int) -> bool:
        return self.low <= level <= self.high

    def to_list(self) -> list[int]:
        return [self.low, self.high]

    def __str__(self) -> str:
        if self.low == self.high:
            return f"Level {self.low}"
        return f"Levels {self.low}-{self.high}"


# ---------------------------------------------------------
# Per-category value normalisers
# ---------------------------------------------------------

def _as_real(category: FilterCategory, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidCriterion(category, value, "expected a number")
    number = float(value)
    if math.isnan(number) or math.isinf(number):
        raise InvalidCriterion(category, value, "expected a finite number")
    return number


def _normalise_subject(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidCriterion(FilterCategory.SUBJECT, value, "expected a non-empty subject code")
    return value.strip().upper()


def _normalise_rating_min(value: Any) -> float:
    rating = _as_real(FilterCategory.RATING_MIN, value)
    if not 0.0 <= rating <= MAX_RATING:
        raise InvalidCriterion(
            FilterCategory.RATING_MIN, value, f"rating must be between 0 and {MAX_RATING:g}"
        )
    return rating


def _normalise_price_max(value: Any) -> float:
    price = _as_real(FilterCategory.PRICE_MAX, value)
    if price < 0:
        raise InvalidCriterion(FilterCategory.PRICE_MAX, value, "price must not be negative")
    return price


def _normalise_level(value: Any) -> LevelRange:
    if isinstance(value, LevelRange):
        return value
    if isinstance(value, bool):
        raise InvalidCriterion(FilterCategory.LEVEL, value, "expected a level or level range")
    if isinstance(value, int):
        return LevelRange(value, value)
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return LevelRange(value[0], value[1])
    raise InvalidCriterion(FilterCategory.LEVEL, value, "expected a level or level range")


def _normalise_availability(value: Any) -> DeliveryMode:
    if isinstance(value, DeliveryMode):
        return value
    if isinstance(value, str):
        try:
            return DeliveryMode(value.strip().lower())
        except ValueError:
            pass
    allowed = ", ".join(m.value for m in DeliveryMode)
    raise InvalidCriterion(FilterCategory.AVAILABILITY, value, f"expected one of: {allowed}")


_NORMALISERS: Dict[FilterCategory, Callable[[Any], Any]] = {
    FilterCategory.SUBJECT: _normalise_subject,
    FilterCategory.RATING_MIN: _normalise_rating_min,
    FilterCategory.PRICE_MAX: _normalise_price_max,
    FilterCategory.LEVEL: _normalise_level,
    FilterCategory.AVAILABILITY: _normalise_availability,
}


def coerce_category(category: Any) -> FilterCategory:
    """Accept a FilterCategory or its string value ("rating_min")."""
    if isinstance(category, FilterCategory):
        return category
    if isinstance(category, str):
        try:
            return FilterCategory(category.strip().lower())
        except ValueError:
            pass
    raise InvalidCriterion(category, None, "unknown filter category")


@dataclass(frozen=True)
class FilterCriterion:
    """
    A single filter predicate: one category plus its value.

    The value is validated and normalised when the criterion is built
    (subject codes upper-cased, numbers turned into floats, levels into
    LevelRange, delivery modes into DeliveryMode), so two criteria that
    mean the same filter compare equal.

    :raises InvalidCriterion: if the value does not fit the category.
    """

    category: FilterCategory
    value: Any

    def __post_init__(self) -> None:
        if not isinstance(self.category, FilterCategory):
            raise InvalidCriterion(self.category, self.value, "category must be a FilterCategory")
        normalised = _NORMALISERS[self.category](self.value)
        object.__setattr__(self, "value", normalised)

    @classmethod
    def of(cls, category: Any, value: Any) -> FilterCriterion:
        return cls(coerce_category(category), value)

    def value_to_json(self) -> Any:
        if isinstance(self.value, LevelRange):
            return self.value.to_list()
        if isinstance(self.value, DeliveryMode):
            return self.value.value
        return self.value

    def label(self) -> str:
        """Short human-readable label, used for the active-filter chips."""
        if self.category is FilterCategory.SUBJECT:
            return f"Subject: {self.value}"
        if self.category is FilterCategory.RATING_MIN:
            return f"Rating ≥ {self.value:g}"
        if self.category is FilterCategory.PRICE_MAX:
            return f"Price ≤ {self.value:g}"
        if self.category is FilterCategory.LEVEL:
            return str(self.value)
        return f"Delivery: {self.value}"
