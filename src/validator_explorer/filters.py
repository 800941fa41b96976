# src/validator_explorer/filters.py
# SPDX-License-Identifier: MIT

"""
Table filters.

FilterState is immutable; the toggle_* / set_* helpers return a new state.
Each dimension is ANDed with the others and an empty selection means
"no constraint" for that dimension.
"""

from dataclasses import dataclass, replace
from typing import FrozenSet, Iterable, List

from .aggregate import asn_key, client_key, data_center_key, version_key
from .records import ValidatorRecord

ALL = "all"
PARTICIPANT = "participant"
NON_PARTICIPANT = "non-participant"


@dataclass(frozen=True)
class FilterState:
    versions: FrozenSet[str] = frozenset()
    participation: str = ALL
    clients: FrozenSet[str] = frozenset()
    asns: FrozenSet[str] = frozenset()
    data_centers: FrozenSet[str] = frozenset()

    @property
    def is_default(self) -> bool:
        return self == DEFAULT_FILTERS


DEFAULT_FILTERS = FilterState()


def participation_matches(r: ValidatorRecord, mode: str) -> bool:
    if not mode or mode == ALL:
        return True
    if mode == PARTICIPANT:
        return r.participant
    if mode == NON_PARTICIPANT:
        return not r.participant
    return r.participant and r.participation_state == mode


def matches(r: ValidatorRecord, state: FilterState) -> bool:
    if state.versions and version_key(r) not in state.versions:
        return False
    if not participation_matches(r, state.participation):
        return False
    if state.clients and client_key(r) not in state.clients:
        return False
    if state.asns and asn_key(r) not in state.asns:
        return False
    if state.data_centers and data_center_key(r) not in state.data_centers:
        return False
    return True


def apply_filters(records: Iterable[ValidatorRecord], state: FilterState) -> List[ValidatorRecord]:
    return [r for r in records if matches(r, state)]


# ---------------------------
# Transitions
# ---------------------------
def _toggle(selected: FrozenSet[str], value: str) -> FrozenSet[str]:
    return selected - {value} if value in selected else selected | {value}


def toggle_version(state: FilterState, version: str) -> FilterState:
    return replace(state, versions=_toggle(state.versions, version))


def toggle_version_group(state: FilterState, versions: Iterable[str]) -> FilterState:
    """
    Select every version of a minor group, or drop them all if the whole
    group is already selected.
    """
    members = frozenset(versions)
    if not members:
        return state
    if members <= state.versions:
        return replace(state, versions=state.versions - members)
    return replace(state, versions=state.versions | members)


def toggle_client(state: FilterState, client: str) -> FilterState:
    return replace(state, clients=_toggle(state.clients, client))


def toggle_asn(state: FilterState, asn: str) -> FilterState:
    return replace(state, asns=_toggle(state.asns, str(asn)))


def toggle_data_center(state: FilterState, data_center: str) -> FilterState:
    return replace(state, data_centers=_toggle(state.data_centers, data_center))


def set_participation(state: FilterState, mode: str) -> FilterState:
    return replace(state, participation=mode or ALL)


def clear_filters() -> FilterState:
    return DEFAULT_FILTERS
