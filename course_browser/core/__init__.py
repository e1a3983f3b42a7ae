"""
Core domain layer: filter criteria, the filter-state engine and the
query descriptor it produces
"""

from .criteria import DeliveryMode, FilterCategory, FilterCriterion, LevelRange
from .exceptions import InvalidCriterion
from .filter_state import FilterStateEngine
from .query import QueryDescriptor

__all__ = [
    "DeliveryMode",
    "FilterCategory",
    "FilterCriterion",
    "FilterStateEngine",
    "InvalidCriterion",
    "LevelRange",
    "QueryDescriptor",
]
