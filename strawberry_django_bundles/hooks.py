"""Named extension points the host schema and the bundle types talk through."""

from __future__ import annotations

import itertools
from collections import defaultdict
from typing import Any, Callable

PRODUCT_TYPES = "product_types"
PRODUCT_TYPES_ENUM_VALUES = "product_types_enum_values"
CONNECTION_EDGES = "connection_edges"
BUNDLE_ITEM_LIMIT = "product_bundles_item_connector_limit"

DEFAULT_PRIORITY = 10


def field_group_flag(product_type: str, group: str) -> str:
    """Return the name of the flag deciding if `group` fields apply to `product_type`."""
    return f"{product_type}_product_model_use_{group}_fields"


def return_true(*args: Any) -> bool:
    return True


def return_false(*args: Any) -> bool:
    return False


class FilterRegistry:
    """Registry of filter callbacks keyed by hook name.

    Every callback receives the current value followed by the extra arguments
    given to `apply_filters` and returns the new value. Callbacks run ordered
    by priority (lowest first) and, for equal priorities, by registration order.
    """

    def __init__(self):
        self._filters: dict[str, list[tuple[int, int, Callable[..., Any]]]] = (
            defaultdict(list)
        )
        self._counter = itertools.count()

    def add_filter(
        self,
        name: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
    ) -> Callable[..., Any]:
        self._filters[name].append((priority, next(self._counter), callback))
        self._filters[name].sort(key=lambda entry: entry[:2])
        return callback

    def remove_filter(self, name: str, callback: Callable[..., Any]) -> bool:
        entries = self._filters.get(name, [])
        kept = [entry for entry in entries if entry[2] is not callback]
        if len(kept) == len(entries):
            return False

        self._filters[name] = kept
        return True

    def has_filter(self, name: str) -> bool:
        return bool(self._filters.get(name))

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        for _priority, _order, callback in list(self._filters.get(name, [])):
            value = callback(value, *args)

        return value
