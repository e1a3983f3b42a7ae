from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from course_browser.core.criteria import (
    CATEGORY_ORDER,
    DeliveryMode,
    FilterCategory,
    FilterCriterion,
    LevelRange,
)


@dataclass(frozen=True)
class QueryDescriptor:
    """
    Read-only snapshot of the active filters, handed to the catalog service.

    Fields left as None are unconstrained. Two descriptors built from the
    same filters compare equal, whatever order the filters were applied in.

    - subject: subject code prefix, e.g. "COMP"
    - rating_min: inclusive minimum average rating
    - price_max: inclusive maximum price
    - level: inclusive range of course levels
    - availability: delivery mode
    """

    subject: Optional[str] = None
    rating_min: Optional[float] = None
    price_max: Optional[float] = None
    level: Optional[LevelRange] = None
    availability: Optional[DeliveryMode] = None

    @classmethod
    def from_criteria(cls, criteria: Iterable[FilterCriterion]) -> QueryDescriptor:
        fields = {c.category.value: c.value for c in criteria}
        return cls(**fields)

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, category.value) is None for category in CATEGORY_ORDER)

    def active_categories(self) -> tuple[FilterCategory, ...]:
        return tuple(c for c in CATEGORY_ORDER if getattr(self, c.value) is not None)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for category in self.active_categories():
            value = getattr(self, category.value)
            if isinstance(value, LevelRange):
                value = value.to_list()
            elif isinstance(value, DeliveryMode):
                value = value.value
            out[category.value] = value
        return out
