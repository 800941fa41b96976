# src/validator_explorer/records.py
# SPDX-License-Identifier: MIT

"""
Validator records and snapshot loading.

A snapshot is the JSON dump of the cluster's vote accounts: either a bare
array or an object with a "validators" array. Field names follow the RPC
camelCase shape (identityPubkey, voteAccountPubkey, activatedStake, ...);
snake_case aliases are accepted too.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

logger = logging.getLogger(__name__)

LAMPORTS_PER_SOL = 10 ** 9
PRIVATE_VALIDATOR = "private validator"
UNKNOWN = "Unknown"


@dataclass(frozen=True)
class ValidatorRecord:
    identity_key: str
    vote_key: str
    stake: int
    version: str = ""
    delinquent: bool = False
    name: str = PRIVATE_VALIDATOR
    participant: bool = False
    participation_state: Optional[str] = None
    asn: Optional[int] = None
    data_center: Optional[str] = None
    software_client: Optional[str] = None

    @property
    def stake_sol(self) -> float:
        return self.stake / LAMPORTS_PER_SOL


def _first(raw: Dict[str, object], *names: str) -> object:
    for n in names:
        if n in raw and raw[n] is not None:
            return raw[n]
    return None


def _as_stake(value: object) -> int:
    if isinstance(value, bool):
        return 0
    try:
        return max(int(value), 0)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return 0


def record_from_dict(raw: Dict[str, object]) -> ValidatorRecord:
    """
    Map one snapshot entry to a bare ValidatorRecord (no enrichment yet).
    Raises ValueError when either key is missing; the loader skips those.
    """
    identity = _first(raw, "identityPubkey", "identity_key", "identity")
    vote = _first(raw, "voteAccountPubkey", "vote_key", "votePubkey")
    if not identity or not vote:
        raise ValueError("entry has no identity or vote key")
    version = _first(raw, "version")
    return ValidatorRecord(
        identity_key=str(identity),
        vote_key=str(vote),
        stake=_as_stake(_first(raw, "activatedStake", "stake")),
        version=str(version) if version is not None else "",
        delinquent=bool(_first(raw, "delinquent") or False),
    )


def parse_snapshot(data: object) -> List[ValidatorRecord]:
    if isinstance(data, dict):
        data = data.get("validators") or []
    if not isinstance(data, list):
        logger.warning("Snapshot has no validator list; treating as empty")
        return []

    out: List[ValidatorRecord] = []
    for i, entry in enumerate(data):
        if not isinstance(entry, dict):
            logger.warning("Skipping snapshot entry %d: not an object", i)
            continue
        try:
            out.append(record_from_dict(entry))
        except ValueError as exc:
            logger.warning("Skipping snapshot entry %d: %s", i, exc)
    return out


def load_snapshot(path: Union[str, Path]) -> List[ValidatorRecord]:
    """
    Read the validator snapshot from disk.
    A missing file or bad JSON gives an empty list, never an exception.
    """
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning("Snapshot %s unreadable: %s", p, exc)
        return []
    try:
        data = json.loads(raw)
    except ValueError as exc:
        logger.warning("Snapshot %s is not valid JSON: %s", p, exc)
        return []
    return parse_snapshot(data)
