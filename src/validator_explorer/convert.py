# src/validator_explorer/convert.py
# SPDX-License-Identifier: MIT

"""
Identity ⇄ vote key conversion.

The direction is inferred from the input: if more of the pasted keys are
identity keys we convert to vote keys, and vice versa. An exact tie
can't be resolved and is reported as an error.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .enrich import index_by_identity, index_by_vote
from .records import ValidatorRecord

TO_VOTE = "vote"
TO_IDENTITY = "identity"


@dataclass(frozen=True)
class ConversionResult:
    original_key: str
    converted_key: str
    is_error: bool = False
    error_message: Optional[str] = None


@dataclass(frozen=True)
class ConversionReport:
    direction: Optional[str]
    results: List[ConversionResult] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def as_text(self) -> str:
        return "\n".join(r.converted_key for r in self.results if not r.is_error)


def split_keys(text: str) -> List[str]:
    return [k.strip() for k in text.splitlines() if k.strip()]


def convert_keys(keys: Iterable[str], records: Sequence[ValidatorRecord]) -> ConversionReport:
    keys = [k.strip() for k in keys if k and k.strip()]
    if not keys:
        return ConversionReport(None, error="Please enter at least one key")

    by_identity = index_by_identity(records)
    by_vote = index_by_vote(records)

    n_identity = sum(1 for k in keys if k in by_identity)
    n_vote = sum(1 for k in keys if k in by_vote and k not in by_identity)
    if n_identity == n_vote and n_identity > 0:
        return ConversionReport(
            None,
            error="Cannot determine conversion direction: equal number of identity and vote accounts",
        )

    direction = TO_VOTE if n_identity > n_vote else TO_IDENTITY
    results: List[ConversionResult] = []
    for k in keys:
        if direction == TO_VOTE and k in by_identity:
            results.append(ConversionResult(k, by_identity[k].vote_key))
        elif direction == TO_IDENTITY and k in by_vote:
            results.append(ConversionResult(k, by_vote[k].identity_key))
        elif k in by_identity or k in by_vote:
            # already in the target form
            results.append(ConversionResult(k, k))
        else:
            results.append(ConversionResult(k, k, True, "Key not found in validator set"))
    return ConversionReport(direction, results)
