"""
Top-level package for the course browser.

This package exposes the core architecture (filter domain, catalog
service, UI adapters). Most code should import from submodules such as:
    course_browser.core
    course_browser.services
    course_browser.ui
"""

__all__: list[str] = []
