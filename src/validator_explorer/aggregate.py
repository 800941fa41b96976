# src/validator_explorer/aggregate.py
# SPDX-License-Identifier: MIT

"""
Stake aggregation.

Numerators come from whatever subset is passed in; the denominator is the
stake of the full record set (total_records), so percentages of a filtered
view stay relative to the whole cluster.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Sequence

from .records import UNKNOWN, ValidatorRecord
from .versions import UNKNOWN_VERSION, group_sort_key, minor_version_group, version_sort_key


@dataclass(frozen=True)
class StakeShare:
    key: str
    stake_sum: int
    stake_percentage: str


@dataclass(frozen=True)
class VersionGroup:
    group: str
    stake_sum: int
    stake_percentage: str
    versions: List[StakeShare]


@dataclass(frozen=True)
class StakeSummary:
    total_stake: int
    matching_stake: int
    matching_percentage: str
    participant_stake: int
    participant_percentage: str


def total_stake(records: Iterable[ValidatorRecord]) -> int:
    return sum(r.stake for r in records)


def stake_percentage(stake: int, total: int) -> str:
    if not total:
        return "0.00"
    return f"{stake / total * 100:.2f}"


# ---------------------------
# Partition keys
# ---------------------------
def version_key(r: ValidatorRecord) -> str:
    return r.version or UNKNOWN_VERSION


def client_key(r: ValidatorRecord) -> str:
    return r.software_client or UNKNOWN


def asn_key(r: ValidatorRecord) -> str:
    return str(r.asn) if r.asn is not None else UNKNOWN


def data_center_key(r: ValidatorRecord) -> str:
    return r.data_center or UNKNOWN


def _sum_by(records: Iterable[ValidatorRecord], key_fn: Callable[[ValidatorRecord], Hashable]) -> Dict[Hashable, int]:
    # dict keeps first-seen order, which is the tie-break for equal stakes
    sums: Dict[Hashable, int] = {}
    for r in records:
        k = key_fn(r)
        sums[k] = sums.get(k, 0) + r.stake
    return sums


def aggregate(
    records: Sequence[ValidatorRecord],
    key_fn: Callable[[ValidatorRecord], Hashable],
    total_records: Optional[Sequence[ValidatorRecord]] = None,
) -> List[StakeShare]:
    """
    Stake per partition, highest stake first (stable for ties).
    """
    total = total_stake(records if total_records is None else total_records)
    sums = _sum_by(records, key_fn)
    ordered = sorted(sums.items(), key=lambda kv: -kv[1])
    return [StakeShare(str(k), s, stake_percentage(s, total)) for k, s in ordered]


def by_version(
    records: Sequence[ValidatorRecord],
    total_records: Optional[Sequence[ValidatorRecord]] = None,
) -> List[StakeShare]:
    total = total_stake(records if total_records is None else total_records)
    sums = _sum_by(records, version_key)
    return [
        StakeShare(v, sums[v], stake_percentage(sums[v], total))
        for v in sorted(sums, key=version_sort_key)
    ]


def version_groups(
    records: Sequence[ValidatorRecord],
    total_records: Optional[Sequence[ValidatorRecord]] = None,
) -> List[VersionGroup]:
    """
    Two-level partition: minor group → member versions.

    Every version lands in exactly the group minor_version_group() gives
    it, and a group's stake is the sum of its versions' stakes.
    """
    total = total_stake(records if total_records is None else total_records)
    members: Dict[str, List[StakeShare]] = {}
    for share in by_version(records, total_records):
        members.setdefault(minor_version_group(share.key), []).append(share)

    out: List[VersionGroup] = []
    for g in sorted(members, key=group_sort_key):
        stake = sum(s.stake_sum for s in members[g])
        out.append(VersionGroup(g, stake, stake_percentage(stake, total), members[g]))
    return out


def by_client(records, total_records=None) -> List[StakeShare]:
    return aggregate(records, client_key, total_records)


def by_asn(records, total_records=None) -> List[StakeShare]:
    return aggregate(records, asn_key, total_records)


def by_data_center(records, total_records=None) -> List[StakeShare]:
    return aggregate(records, data_center_key, total_records)


# ---------------------------
# Summary / filter options
# ---------------------------
def stake_summary(filtered: Sequence[ValidatorRecord], all_records: Sequence[ValidatorRecord]) -> StakeSummary:
    total = total_stake(all_records)
    matching = total_stake(filtered)
    participant = total_stake(r for r in all_records if r.participant)
    return StakeSummary(
        total_stake=total,
        matching_stake=matching,
        matching_percentage=stake_percentage(matching, total),
        participant_stake=participant,
        participant_percentage=stake_percentage(participant, total),
    )


def participation_states(records: Iterable[ValidatorRecord]) -> List[str]:
    return sorted({r.participation_state for r in records if r.participant and r.participation_state})


# Option lists always cover the full set so a selection never hides its own option.
def client_options(all_records: Sequence[ValidatorRecord]) -> List[StakeShare]:
    return by_client(all_records)


def asn_options(all_records: Sequence[ValidatorRecord]) -> List[StakeShare]:
    return by_asn(all_records)


def data_center_options(all_records: Sequence[ValidatorRecord]) -> List[StakeShare]:
    return by_data_center(all_records)
