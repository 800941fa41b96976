# src/validator_explorer/sorting.py
# SPDX-License-Identifier: MIT

"""
Single-key table sorting.

Each sortable field compares by its natural order: numbers numerically,
strings lexically, booleans False < True. A missing value sorts as "" or 0.
sort_records() is stable in both directions.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List

from .records import ValidatorRecord

ASC = "asc"
DESC = "desc"
DIRECTIONS = (ASC, DESC)


def _text(field: str) -> Callable[[ValidatorRecord], str]:
    return lambda r: getattr(r, field) or ""


def _number(field: str) -> Callable[[ValidatorRecord], int]:
    return lambda r: getattr(r, field) or 0


def _flag(field: str) -> Callable[[ValidatorRecord], bool]:
    return lambda r: bool(getattr(r, field))


SORT_FIELDS: Dict[str, Callable[[ValidatorRecord], object]] = {
    "name": _text("name"),
    "identity_key": _text("identity_key"),
    "vote_key": _text("vote_key"),
    "stake": _number("stake"),
    "version": _text("version"),
    "participant": _flag("participant"),
    "participation_state": _text("participation_state"),
    "delinquent": _flag("delinquent"),
    "software_client": _text("software_client"),
    "asn": _number("asn"),
    "data_center": _text("data_center"),
}


@dataclass(frozen=True)
class SortState:
    key: str = "stake"
    direction: str = DESC

    @property
    def is_default(self) -> bool:
        return self == DEFAULT_SORT


DEFAULT_SORT = SortState()


def compare(a: ValidatorRecord, b: ValidatorRecord, key: str, direction: str = ASC) -> int:
    get = SORT_FIELDS[key]
    av, bv = get(a), get(b)
    c = (av > bv) - (av < bv)  # type: ignore[operator]
    return -c if direction == DESC else c


def sort_records(records: Iterable[ValidatorRecord], state: SortState = DEFAULT_SORT) -> List[ValidatorRecord]:
    get = SORT_FIELDS.get(state.key, SORT_FIELDS[DEFAULT_SORT.key])
    # reverse=True keeps equal records in their original order
    return sorted(records, key=get, reverse=state.direction == DESC)


def toggle_sort(state: SortState, key: str) -> SortState:
    """Same column flips the direction; a new column starts descending."""
    if key not in SORT_FIELDS:
        return state
    if state.key == key:
        return SortState(key, ASC if state.direction == DESC else DESC)
    return SortState(key, DESC)
