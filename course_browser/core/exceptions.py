from __future__ import annotations

from typing import Any, Optional


class CourseBrowserError(Exception):
    """Base exception for all course_browser errors"""
    pass


class InvalidCriterion(CourseBrowserError, ValueError):
    """
    A filter value does not match the shape expected for its category
    (e.g. a non-numeric RATING_MIN), or the category itself is unknown.
    """

    def __init__(self, category: Any, value: Any, reason: str):
        self.category = category
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid criterion for {category!s}: {value!r} ({reason})")


class ConfigError(CourseBrowserError):
    """Missing or inconsistent global.json / environment config"""
    pass


class CatalogSchemaError(CourseBrowserError):
    """
    Course records don't match what CourseCatalog expects:
    missing columns, non-numeric ratings or prices, etc
    """

    def __init__(self, message: str, missing: Optional[list[str]] = None):
        self.missing = list(missing or [])
        super().__init__(message)
