from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest

from course_browser.core.criteria import DeliveryMode, LevelRange
from course_browser.core.exceptions import CatalogSchemaError
from course_browser.core.query import QueryDescriptor
from course_browser.services.catalog_service import CourseCatalog


def _records():
    return [
        {"code": "COMP1511", "title": "Programming Fundamentals", "faculty": "Engineering",
         "rating": 4.5, "review_count": 234, "price": 4800, "mode": "hybrid"},
        {"code": "COMP2521", "title": "Data Structures", "faculty": "Engineering",
         "rating": 4.3, "review_count": 198, "price": 4800, "mode": "in-person"},
        {"code": "COMP3311", "title": "Database Systems", "faculty": "Engineering",
         "rating": 3.9, "review_count": 121, "price": 4000, "mode": "online"},
        {"code": "MATH1131", "title": "Mathematics 1A", "faculty": "Science",
         "rating": 4.5, "review_count": 276, "price": 3600, "mode": "In-Person"},
        {"code": "ARTS1090", "title": "Media, Society, Politics", "faculty": "Arts",
         "rating": 4.0, "review_count": 88, "price": 2900, "mode": "online"},
    ]


def _make_catalog() -> CourseCatalog:
    return CourseCatalog.from_records(_records())


def test_empty_descriptor_returns_everything_sorted_by_rating():
    catalog = _make_catalog()
    result = catalog.query(QueryDescriptor())

    assert len(result) == 5
    # ties on rating broken by code
    assert list(result["code"]) == ["COMP1511", "MATH1131", "COMP2521", "ARTS1090", "COMP3311"]


def test_subject_filter_matches_code_prefix():
    catalog = _make_catalog()
    result = catalog.query(QueryDescriptor(subject="COMP"))
    assert set(result["code"]) == {"COMP1511", "COMP2521", "COMP3311"}


def test_rating_min_is_inclusive():
    catalog = _make_catalog()
    result = catalog.query(QueryDescriptor(rating_min=4.5))
    assert set(result["code"]) == {"COMP1511", "MATH1131"}


def test_price_max_is_inclusive():
    catalog = _make_catalog()
    result = catalog.query(QueryDescriptor(price_max=4000.0))
    assert set(result["code"]) == {"COMP3311", "MATH1131", "ARTS1090"}


def test_level_range_uses_first_digit_of_course_number():
    catalog = _make_catalog()

    first_year = catalog.query(QueryDescriptor(level=LevelRange(1, 1)))
    assert set(first_year["code"]) == {"COMP1511", "MATH1131", "ARTS1090"}

    upper = catalog.query(QueryDescriptor(level=LevelRange(2, 3)))
    assert set(upper["code"]) == {"COMP2521", "COMP3311"}


def test_availability_matches_normalised_mode():
    catalog = _make_catalog()
    result = catalog.query(QueryDescriptor(availability=DeliveryMode.IN_PERSON))
    assert set(result["code"]) == {"COMP2521", "MATH1131"}


def test_filters_combine_with_and():
    catalog = _make_catalog()
    result = catalog.query(
        QueryDescriptor(subject="COMP", rating_min=4.0, availability=DeliveryMode.HYBRID)
    )
    assert list(result["code"]) == ["COMP1511"]


def test_no_match_gives_empty_frame():
    catalog = _make_catalog()
    result = catalog.query(QueryDescriptor(subject="LAWS"))
    assert result.empty
    assert "code" in result.columns


def test_sort_options():
    catalog = _make_catalog()
    by_reviews = catalog.query(QueryDescriptor(), sort_by="reviews")
    alpha = catalog.query(QueryDescriptor(), sort_by="alphabetical")

    assert list(by_reviews["code"])[0] == "MATH1131"
    assert list(alpha["code"]) == sorted(r["code"] for r in _records())

    with pytest.raises(ValueError):
        catalog.query(QueryDescriptor(), sort_by="price")


def test_facets():
    catalog = _make_catalog()
    assert catalog.subjects() == ["ARTS", "COMP", "MATH"]
    assert catalog.levels() == [1, 2, 3]
    assert catalog.max_price() == 4800.0


def test_missing_columns_raise_schema_error():
    with pytest.raises(CatalogSchemaError) as exc:
        CourseCatalog(pd.DataFrame({"code": ["COMP1511"], "title": ["x"]}))
    assert exc.value.missing == ["rating", "price", "mode"]


def test_non_numeric_rating_raises_schema_error():
    records = _records()
    records[0]["rating"] = "great"
    with pytest.raises(CatalogSchemaError):
        CourseCatalog.from_records(records)


def test_optional_columns_get_defaults():
    catalog = CourseCatalog.from_records(
        [{"code": "COMP1511", "title": "x", "rating": 4, "price": 10, "mode": "online"}]
    )
    row = catalog.courses.iloc[0]
    assert row["faculty"] == ""
    assert row["review_count"] == 0
    assert row["skills"] == []


def test_from_json(tmp_path: Path):
    path = tmp_path / "courses.json"
    path.write_text(json.dumps(_records()))

    catalog = CourseCatalog.from_json(path)
    assert len(catalog) == 5


def test_from_json_errors(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        CourseCatalog.from_json(tmp_path / "missing.json")

    path = tmp_path / "courses.json"
    path.write_text(json.dumps({"courses": []}))
    with pytest.raises(CatalogSchemaError):
        CourseCatalog.from_json(path)


def test_empty_catalog_is_valid(tmp_path: Path):
    catalog = CourseCatalog.from_records([])

    assert len(catalog) == 0
    assert catalog.query(QueryDescriptor(subject="COMP", rating_min=4.0)).empty
    assert catalog.query(QueryDescriptor(), search="data").empty
    assert catalog.subjects() == []
    assert catalog.levels() == []
    assert catalog.max_price() == 0.0

    path = tmp_path / "courses.json"
    path.write_text("[]")
    assert len(CourseCatalog.from_json(path)) == 0


def _records_with_skills():
    records = _records()
    records[0]["skills"] = ["C", "Problem Solving"]
    records[1]["skills"] = ["Algorithms", "Data Structures"]
    records[2]["skills"] = ["SQL", "Database Design"]
    return records


@pytest.mark.parametrize(
    "search, expected",
    [
        ("comp2521", {"COMP2521"}),
        ("DATA", {"COMP2521", "COMP3311"}),
        ("science", {"MATH1131"}),
        ("sql", {"COMP3311"}),
        ("problem", {"COMP1511"}),
        ("politics", {"ARTS1090"}),
        ("quantum", set()),
    ],
)
def test_search_matches_code_title_faculty_and_skills(search, expected):
    catalog = CourseCatalog.from_records(_records_with_skills())
    result = catalog.query(QueryDescriptor(), search=search)
    assert set(result["code"]) == expected


def test_search_combines_with_filters():
    catalog = CourseCatalog.from_records(_records_with_skills())
    result = catalog.query(QueryDescriptor(availability=DeliveryMode.ONLINE), search="engineering")
    assert list(result["code"]) == ["COMP3311"]


@pytest.mark.parametrize("search", [None, "", "   "])
def test_blank_search_returns_everything(search):
    catalog = _make_catalog()
    assert len(catalog.query(QueryDescriptor(), search=search)) == 5


def test_newest_sort_puts_new_courses_first():
    records = _records()
    records[4]["is_new"] = True
    records[2]["is_new"] = True
    catalog = CourseCatalog.from_records(records)

    result = catalog.query(QueryDescriptor(), sort_by="newest")
    assert list(result["code"]) == ["ARTS1090", "COMP3311", "COMP1511", "COMP2521", "MATH1131"]


def test_is_new_defaults_to_false():
    catalog = _make_catalog()
    assert not catalog.courses["is_new"].any()
    # without any new course, newest falls back to code order
    newest = catalog.query(QueryDescriptor(), sort_by="newest")
    assert list(newest["code"]) == sorted(r["code"] for r in _records())
