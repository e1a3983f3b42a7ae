from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from course_browser.core.exceptions import CatalogSchemaError
from course_browser.core.query import QueryDescriptor

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("code", "title", "rating", "price", "mode")
OPTIONAL_DEFAULTS: Dict[str, Any] = {
    "faculty": "",
    "review_count": 0,
    "skills": None,
    "is_new": False,
}
SORT_OPTIONS = ("rating", "reviews", "alphabetical", "newest")
SEARCH_COLUMNS = ("code", "title", "faculty")


class CourseCatalog:
    """
    In-memory course catalog backed by a pandas DataFrame.

    Applies a QueryDescriptor to the course table:

    - subject: course code starts with the subject (case-insensitive)
    - rating_min: rating >= rating_min
    - price_max: price <= price_max
    - level: first digit of the course number within the range
    - availability: delivery mode equals the requested mode

    Free-text search is separate from the filters: it matches code, title,
    faculty or any skill, case-insensitively.
    """

    def __init__(self, courses: pd.DataFrame):
        self._df = _normalise_frame(courses)

    @classmethod
    def from_records(cls, records: Sequence[Dict[str, Any]]) -> CourseCatalog:
        records = list(records)
        if not records:
            return cls(pd.DataFrame(columns=[*REQUIRED_COLUMNS, *OPTIONAL_DEFAULTS]))
        return cls(pd.DataFrame.from_records(records))

    @classmethod
    def from_json(cls, path: Path | str) -> CourseCatalog:
        """
        Load a catalog from a JSON list of course objects.

        :raises FileNotFoundError: if the file does not exist.
        :raises CatalogSchemaError: if the content is not a list of records
            or required columns are missing.
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found at {path}")

        with path.open(encoding="utf-8") as f:
            raw = json.load(f)

        if not isinstance(raw, list):
            raise CatalogSchemaError(f"{path} must contain a JSON list of courses")

        catalog = cls.from_records(raw)
        logger.info(
            "Course catalog loaded",
            extra={"path": str(path), "n_courses": len(catalog)},
        )
        return catalog

    def __len__(self) -> int:
        return len(self._df)

    @property
    def courses(self) -> pd.DataFrame:
        return self._df.copy()

    # ---------------------------------------------------------
    # Querying
    # ---------------------------------------------------------

    def query(
        self,
        descriptor: QueryDescriptor,
        sort_by: str = "rating",
        search: Optional[str] = None,
    ) -> pd.DataFrame:
        """
        Return the courses matching every active filter and the search text, sorted.

        :raises ValueError: for an unknown ``sort_by``.
        """
        if sort_by not in SORT_OPTIONS:
            raise ValueError(f"Unknown sort '{sort_by}', expected one of {', '.join(SORT_OPTIONS)}")

        df = self._df
        mask = pd.Series(True, index=df.index)

        if descriptor.subject is not None:
            mask &= df["code"].str.upper().str.startswith(descriptor.subject)
        if descriptor.rating_min is not None:
            mask &= df["rating"] >= descriptor.rating_min
        if descriptor.price_max is not None:
            mask &= df["price"] <= descriptor.price_max
        if descriptor.level is not None:
            levels = df["level"]
            in_range = levels.between(descriptor.level.low, descriptor.level.high)
            mask &= in_range.fillna(False).astype(bool)
        if descriptor.availability is not None:
            mask &= df["mode"] == descriptor.availability.value
        if search and search.strip():
            mask &= _search_mask(df, search.strip().lower())

        result = df[mask]
        result = _sort(result, sort_by)

        logger.debug(
            "Catalog query",
            extra={
                "filters": descriptor.to_dict(),
                "sort_by": sort_by,
                "search": search,
                "n_results": len(result),
            },
        )
        return result.reset_index(drop=True)

    # ---------------------------------------------------------
    # Facets
    # ---------------------------------------------------------

    def subjects(self) -> List[str]:
        return sorted(s for s in self._df["subject"].dropna().unique() if s)

    def levels(self) -> List[int]:
        return sorted(int(v) for v in self._df["level"].dropna().unique())

    def max_price(self) -> float:
        if self._df.empty:
            return 0.0
        return float(self._df["price"].max())


def _normalise_frame(df: pd.DataFrame) -> pd.DataFrame:
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise CatalogSchemaError(
            f"Course records are missing required columns: {', '.join(missing)}",
            missing=missing,
        )

    df = df.copy()
    for col, default in OPTIONAL_DEFAULTS.items():
        if col not in df.columns:
            df[col] = default

    for col in ("rating", "price", "review_count"):
        try:
            df[col] = pd.to_numeric(df[col])
        except (TypeError, ValueError) as e:
            raise CatalogSchemaError(f"Column '{col}' must be numeric: {e}") from e

    df["code"] = df["code"].astype(str).str.strip()
    df["title"] = df["title"].fillna("").astype(str)
    df["faculty"] = df["faculty"].fillna("").astype(str)
    df["mode"] = df["mode"].astype(str).str.strip().str.lower()
    df["skills"] = df["skills"].apply(
        lambda s: [str(x) for x in s] if isinstance(s, (list, tuple)) else []
    )
    df["is_new"] = df["is_new"].map(lambda v: v is True)

    # COMP1511 -> subject "COMP", level 1
    df["subject"] = df["code"].str.extract(r"^([A-Za-z]+)", expand=False).str.upper()
    df["level"] = pd.to_numeric(
        df["code"].str.extract(r"(\d)", expand=False), errors="coerce"
    ).astype("Int64")

    return df.reset_index(drop=True)


def _sort(df: pd.DataFrame, sort_by: str) -> pd.DataFrame:
    if sort_by == "rating":
        return df.sort_values(["rating", "code"], ascending=[False, True], kind="mergesort")
    if sort_by == "reviews":
        return df.sort_values(["review_count", "code"], ascending=[False, True], kind="mergesort")
    if sort_by == "newest":
        return df.sort_values(["is_new", "code"], ascending=[False, True], kind="mergesort")
    return df.sort_values("code", kind="mergesort")


def _search_mask(df: pd.DataFrame, needle: str) -> pd.Series:
    mask = pd.Series(False, index=df.index)
    for col in SEARCH_COLUMNS:
        mask |= df[col].str.lower().str.contains(needle, regex=False)
    in_skills = df["skills"].map(lambda skills: any(needle in s.lower() for s in skills))
    return mask | in_skills.astype(bool)
