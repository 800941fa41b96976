# src/validator_explorer/query.py
# SPDX-License-Identifier: MIT

"""
Shareable URL state
===================

Filter and sort state ⇄ flat query parameters:

  versions     comma list of version strings
  sfdp         participation filter (participant / non-participant / <state>)
  sort         sort field
  sortDir      asc | desc
  clients      comma list of software clients
  asns         comma list of ASNs (digits) or "Unknown"
  datacenters  comma list of data-center keys

List items are percent-encoded before joining, so a value may contain a
comma. Only non-default dimensions are written, which keeps the default URL
empty.

Two triggers, never both for one transition:
  on_load()    external navigation / first load → decode, emits nothing
  on_change()  user changed filters or sort      → encode, emits params
               only when they differ from what the URL already holds
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import parse_qs, quote, unquote, urlencode

from .filters import ALL, DEFAULT_FILTERS, FilterState
from .records import UNKNOWN
from .sorting import DEFAULT_SORT, DIRECTIONS, SORT_FIELDS, SortState

logger = logging.getLogger(__name__)

P_VERSIONS = "versions"
P_SFDP = "sfdp"
P_SORT = "sort"
P_SORT_DIR = "sortDir"
P_CLIENTS = "clients"
P_ASNS = "asns"
P_DATACENTERS = "datacenters"

# Older links used the RPC field names.
_SORT_ALIASES = {
    "activatedStake": "stake",
    "identityPubkey": "identity_key",
    "voteAccountPubkey": "vote_key",
    "sfdp": "participant",
    "sfdpState": "participation_state",
    "softwareClient": "software_client",
    "autonomousSystemNumber": "asn",
    "dataCenterKey": "data_center",
}

ParamsIn = Mapping[str, Union[str, Sequence[str]]]


# ---------------------------
# Lists
# ---------------------------
def _join(values: Iterable[str]) -> str:
    return ",".join(quote(v, safe="") for v in sorted(values))


def _split(raw: str) -> FrozenSet[str]:
    return frozenset(unquote(item) for item in raw.split(",") if item.strip())


def _single(params: ParamsIn, key: str) -> Optional[str]:
    value = params.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        # parse_qs-style lists: last one wins
        value = value[-1] if value else None
    if value is None:
        return None
    # values are kept verbatim; blank means absent
    return value if value.strip() else None


def _asn_item(item: str) -> bool:
    return item == UNKNOWN or item.isdigit()


# ---------------------------
# decode / encode
# ---------------------------
def decode_filters(params: ParamsIn) -> FilterState:
    versions = _split(_single(params, P_VERSIONS) or "")
    clients = _split(_single(params, P_CLIENTS) or "")
    data_centers = _split(_single(params, P_DATACENTERS) or "")

    asns = _split(_single(params, P_ASNS) or "")
    bad = {a for a in asns if not _asn_item(a)}
    if bad:
        logger.debug("Dropping malformed asns: %s", sorted(bad))
        asns = asns - bad

    participation = _single(params, P_SFDP) or ALL

    return FilterState(
        versions=versions,
        participation=participation,
        clients=clients,
        asns=asns,
        data_centers=data_centers,
    )


def decode_sort(params: ParamsIn) -> SortState:
    key = (_single(params, P_SORT) or "").strip()
    key = _SORT_ALIASES.get(key, key) if key else None
    if key not in SORT_FIELDS:
        if key is not None:
            logger.debug("Unknown sort field %r; using default", key)
        key = DEFAULT_SORT.key

    direction = (_single(params, P_SORT_DIR) or "").strip().lower()
    if direction not in DIRECTIONS:
        if direction:
            logger.debug("Unknown sort direction %r; using default", direction)
        direction = DEFAULT_SORT.direction

    return SortState(key, direction)


def decode(params: ParamsIn) -> Tuple[FilterState, SortState]:
    """Query params → (FilterState, SortState); bad values reset only their own dimension."""
    return decode_filters(params), decode_sort(params)


def encode(filters: FilterState, sort: SortState) -> Dict[str, str]:
    out: Dict[str, str] = {}
    if filters.versions:
        out[P_VERSIONS] = _join(filters.versions)
    if filters.participation and filters.participation != ALL:
        out[P_SFDP] = filters.participation
    if sort.key != DEFAULT_SORT.key:
        out[P_SORT] = sort.key
    if sort.direction != DEFAULT_SORT.direction:
        out[P_SORT_DIR] = sort.direction
    if filters.clients:
        out[P_CLIENTS] = _join(filters.clients)
    if filters.asns:
        out[P_ASNS] = _join(filters.asns)
    if filters.data_centers:
        out[P_DATACENTERS] = _join(filters.data_centers)
    return out


def parse_query_string(qs: str) -> Dict[str, list]:
    return parse_qs(qs.lstrip("?"), keep_blank_values=False)


def to_query_string(params: Mapping[str, str]) -> str:
    return urlencode(params)


# ---------------------------
# Trigger separation
# ---------------------------
@dataclass(frozen=True)
class SyncState:
    filters: FilterState = DEFAULT_FILTERS
    sort: SortState = DEFAULT_SORT
    params: Dict[str, str] = field(default_factory=dict)


def on_load(params: ParamsIn) -> SyncState:
    """
    External trigger (first load, back/forward navigation).
    Seeds state from the URL; the canonical params are remembered so the
    next on_change() does not echo them back.
    """
    filters, sort = decode(params)
    return SyncState(filters, sort, encode(filters, sort))


def on_change(current: SyncState, filters: FilterState, sort: SortState) -> Tuple[SyncState, Optional[Dict[str, str]]]:
    """
    User trigger. Returns the new SyncState and the params to write, or
    None when the URL already matches.
    """
    params = encode(filters, sort)
    nxt = SyncState(filters, sort, params)
    if params == current.params:
        return nxt, None
    return nxt, params
