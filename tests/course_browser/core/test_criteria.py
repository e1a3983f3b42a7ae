from __future__ import annotations

import math

import pytest

from course_browser.core.criteria import (
    DeliveryMode,
    FilterCategory,
    FilterCriterion,
    LevelRange,
    coerce_category,
)
from course_browser.core.exceptions import InvalidCriterion


def test_subject_is_normalised_to_upper_case():
    c = FilterCriterion(FilterCategory.SUBJECT, "  comp ")
    assert c.value == "COMP"
    assert c == FilterCriterion(FilterCategory.SUBJECT, "COMP")


def test_numeric_values_become_floats():
    assert FilterCriterion(FilterCategory.RATING_MIN, 4).value == 4.0
    assert isinstance(FilterCriterion(FilterCategory.PRICE_MAX, 500).value, float)


@pytest.mark.parametrize(
    "value",
    ["not-a-number", "4.5", None, True, math.nan, math.inf, -0.5, 5.5],
)
def test_rating_min_rejects_bad_values(value):
    with pytest.raises(InvalidCriterion) as exc:
        FilterCriterion(FilterCategory.RATING_MIN, value)
    assert exc.value.category is FilterCategory.RATING_MIN


def test_price_max_rejects_negative_price():
    with pytest.raises(InvalidCriterion):
        FilterCriterion(FilterCategory.PRICE_MAX, -1)


def test_rating_bounds_are_inclusive():
    assert FilterCriterion(FilterCategory.RATING_MIN, 0).value == 0.0
    assert FilterCriterion(FilterCategory.RATING_MIN, 5).value == 5.0


def test_level_accepts_int_pair_and_range():
    single = FilterCriterion(FilterCategory.LEVEL, 2)
    pair = FilterCriterion(FilterCategory.LEVEL, [1, 3])
    rng = FilterCriterion(FilterCategory.LEVEL, LevelRange(1, 3))

    assert single.value == LevelRange(2, 2)
    assert pair == rng
    assert pair.value.contains(1) and pair.value.contains(3)
    assert not pair.value.contains(4)


@pytest.mark.parametrize("value", [0, 10, [3, 1], (1, 2, 3), "2", True, [1.5, 2]])
def test_level_rejects_bad_values(value):
    with pytest.raises(InvalidCriterion):
        FilterCriterion(FilterCategory.LEVEL, value)


def test_availability_accepts_enum_or_case_insensitive_string():
    assert FilterCriterion(FilterCategory.AVAILABILITY, "In-Person").value is DeliveryMode.IN_PERSON
    assert FilterCriterion(FilterCategory.AVAILABILITY, DeliveryMode.ONLINE).value is DeliveryMode.ONLINE

    with pytest.raises(InvalidCriterion):
        FilterCriterion(FilterCategory.AVAILABILITY, "by-carrier-pigeon")


def test_criterion_is_immutable():
    c = FilterCriterion(FilterCategory.SUBJECT, "COMP")
    with pytest.raises(AttributeError):
        c.value = "MATH"


def test_of_accepts_category_strings():
    c = FilterCriterion.of("rating_min", 4.5)
    assert c.category is FilterCategory.RATING_MIN
    assert c.value == 4.5

    with pytest.raises(InvalidCriterion):
        FilterCriterion.of("colour", "blue")


def test_constructor_requires_enum_category():
    with pytest.raises(InvalidCriterion):
        FilterCriterion("subject", "COMP")


def test_coerce_category():
    assert coerce_category(FilterCategory.LEVEL) is FilterCategory.LEVEL
    assert coerce_category(" Price_Max ") is FilterCategory.PRICE_MAX
    with pytest.raises(InvalidCriterion):
        coerce_category(3)


def test_invalid_criterion_is_a_value_error():
    with pytest.raises(ValueError):
        FilterCriterion(FilterCategory.SUBJECT, "")


def test_value_to_json_and_label():
    level = FilterCriterion(FilterCategory.LEVEL, [1, 2])
    mode = FilterCriterion(FilterCategory.AVAILABILITY, "hybrid")

    assert level.value_to_json() == [1, 2]
    assert mode.value_to_json() == "hybrid"
    assert level.label() == "Levels 1-2"
    assert FilterCriterion(FilterCategory.LEVEL, 3).label() == "Level 3"
    assert FilterCriterion(FilterCategory.RATING_MIN, 4.5).label() == "Rating ≥ 4.5"
    assert mode.label() == "Delivery: hybrid"
