from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from course_browser.core.criteria import (
    CATEGORY_ORDER,
    FilterCategory,
    FilterCriterion,
    coerce_category,
)
from course_browser.core.exceptions import InvalidCriterion
from course_browser.core.query import QueryDescriptor

Observer = Callable[[QueryDescriptor], None]


class FilterStateEngine:
    """
    Owns the active filters for one catalog session.

    At most one criterion is active per category. Every operation that
    actually changes the state notifies the subscribed observers, in
    subscription order, with a fresh QueryDescriptor before it returns.
    Operations that change nothing (setting the value already set,
    clearing an absent category, clearing an empty state) notify no one.

    Mutating operations return True when the state changed.

    The engine is not thread-safe; a host that calls it from several
    threads must serialise those calls.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._criteria: Dict[FilterCategory, FilterCriterion] = {}
        self._observers: List[Observer] = []

    def __repr__(self) -> str:
        return f"FilterStateEngine({self.to_dict()!r})"

    # ---------------------------------------------------------
    # Mutations
    # ---------------------------------------------------------

    def set_criterion(self, criterion: FilterCriterion) -> bool:
        """
        Insert or replace the criterion for ``criterion.category``.

        :raises InvalidCriterion: if ``criterion`` is not a FilterCriterion.
        """
        self._check(criterion)
        if self._criteria.get(criterion.category) == criterion:
            return False
        self._criteria[criterion.category] = criterion
        self._changed("set", criterion.category)
        return True

    def set_value(self, category: Any, value: Any) -> bool:
        """Build a criterion from raw input and set it."""
        try:
            criterion = FilterCriterion.of(category, value)
        except InvalidCriterion as e:
            self._logger.warning(
                "Rejected filter criterion",
                extra={"category": str(e.category), "value": repr(e.value), "reason": e.reason},
            )
            raise
        return self.set_criterion(criterion)

    def clear_criterion(self, category: Any) -> bool:
        category = coerce_category(category)
        if category not in self._criteria:
            return False
        del self._criteria[category]
        self._changed("clear", category)
        return True

    def toggle_criterion(self, criterion: FilterCriterion) -> bool:
        """
        Remove the criterion if the same value is already active for its
        category, otherwise set it. Always changes the state.
        """
        self._check(criterion)
        if self._criteria.get(criterion.category) == criterion:
            del self._criteria[criterion.category]
            self._changed("toggle_off", criterion.category)
        else:
            self._criteria[criterion.category] = criterion
            self._changed("toggle_on", criterion.category)
        return True

    def clear_all(self) -> bool:
        if not self._criteria:
            return False
        self._criteria.clear()
        self._changed("clear_all", None)
        return True

    # ---------------------------------------------------------
    # Queries
    # ---------------------------------------------------------

    def active_count(self) -> int:
        return len(self._criteria)

    def get_criterion(self, category: Any) -> Optional[FilterCriterion]:
        return self._criteria.get(coerce_category(category))

    def criteria(self) -> tuple[FilterCriterion, ...]:
        return tuple(self._criteria[c] for c in CATEGORY_ORDER if c in self._criteria)

    def build_query_descriptor(self) -> QueryDescriptor:
        return QueryDescriptor.from_criteria(self._criteria.values())

    # ---------------------------------------------------------
    # Observers
    # ---------------------------------------------------------

    def subscribe(self, observer: Observer) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    # ---------------------------------------------------------
    # Serialisation (for dcc.Store)
    # ---------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {c.category.value: c.value_to_json() for c in self.criteria()}

    @classmethod
    def from_dict(
        cls,
        data: Optional[Mapping[str, Any]],
        logger: Optional[logging.Logger] = None,
    ) -> FilterStateEngine:
        """
        Rebuild an engine from ``to_dict()`` output. None gives an empty engine.

        :raises InvalidCriterion: if ``data`` is not a mapping or holds an
            unknown category or a malformed value.
        """
        engine = cls(logger=logger)
        if data is None:
            return engine
        if not isinstance(data, Mapping):
            raise InvalidCriterion("filter_state", data, "expected a mapping")
        criteria = [FilterCriterion.of(k, v) for k, v in data.items()]
        for criterion in criteria:
            engine._criteria[criterion.category] = criterion
        return engine

    # ---------------------------------------------------------
    # Internals
    # ---------------------------------------------------------

    def _check(self, criterion: Any) -> None:
        if not isinstance(criterion, FilterCriterion):
            self._logger.warning(
                "Rejected filter criterion",
                extra={"value": repr(criterion), "reason": "not a FilterCriterion"},
            )
            raise InvalidCriterion(
                getattr(criterion, "category", None), criterion, "expected a FilterCriterion"
            )

    def _changed(self, action: str, category: Optional[FilterCategory]) -> None:
        self._logger.debug(
            "Filter state changed",
            extra={
                "action": action,
                "category": str(category) if category is not None else None,
                "active_count": self.active_count(),
            },
        )
        if not self._observers:
            return

        descriptor = self.build_query_descriptor()
        # Snapshot so observers may (un)subscribe while being notified;
        # one removed mid-notification is skipped for this change.
        for observer in list(self._observers):
            if observer in self._observers:
                observer(descriptor)
