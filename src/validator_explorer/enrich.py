# src/validator_explorer/enrich.py
# SPDX-License-Identifier: MIT

"""
Join the snapshot against the three registry lookups:

  name table           vote key      → display name
  participation table  identity key  → Participation(participant, state)
  infra table          vote key      → Infrastructure(asn, data_center, software_client)

Missing tables (None or {}) are fine; every record still comes out once,
in snapshot order.
"""

from dataclasses import replace
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional

from .records import PRIVATE_VALIDATOR, ValidatorRecord


class Participation(NamedTuple):
    participant: bool
    state: Optional[str]


class Infrastructure(NamedTuple):
    asn: Optional[int]
    data_center: Optional[str]
    software_client: Optional[str]


NameTable = Mapping[str, str]
ParticipationTable = Mapping[str, Participation]
InfraTable = Mapping[str, Infrastructure]

_NO_INFRA = Infrastructure(None, None, None)


def enrich_record(
    rec: ValidatorRecord,
    names: NameTable,
    participation: ParticipationTable,
    infra: InfraTable,
) -> ValidatorRecord:
    part = participation.get(rec.identity_key)
    inf = infra.get(rec.vote_key) or _NO_INFRA
    return replace(
        rec,
        name=names.get(rec.vote_key) or PRIVATE_VALIDATOR,
        participant=bool(part and part.participant),
        participation_state=part.state if part and part.participant else None,
        asn=inf.asn,
        data_center=inf.data_center,
        software_client=inf.software_client,
    )


def merge(
    snapshot: Iterable[ValidatorRecord],
    name_table: Optional[NameTable] = None,
    participation_table: Optional[ParticipationTable] = None,
    infra_table: Optional[InfraTable] = None,
) -> List[ValidatorRecord]:
    names = name_table or {}
    participation = participation_table or {}
    infra = infra_table or {}
    return [enrich_record(r, names, participation, infra) for r in snapshot]


def index_by_identity(records: Iterable[ValidatorRecord]) -> Dict[str, ValidatorRecord]:
    return {r.identity_key: r for r in records}


def index_by_vote(records: Iterable[ValidatorRecord]) -> Dict[str, ValidatorRecord]:
    return {r.vote_key: r for r in records}
