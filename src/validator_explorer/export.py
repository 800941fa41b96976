# src/validator_explorer/export.py
# SPDX-License-Identifier: MIT

"""
CSV export of the current table view, plus the small notification value
the table shows after an export or a copy.

The CSV is produced as a string (UTF-8 BOM first so spreadsheet apps pick
the right encoding); writing it to a file or a download is the caller's job.
"""

import csv
import io
import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional, Sequence, Tuple

from .aggregate import stake_percentage, total_stake
from .asn import asn_provider
from .records import LAMPORTS_PER_SOL, UNKNOWN, ValidatorRecord
from .versions import minor_version_group

logger = logging.getLogger(__name__)

BOM = "\ufeff"

HEADER = [
    "Name", "Identity", "Vote Account", "Stake (SOL)", "Stake %",
    "Version", "Minor Group", "SFDP", "SFDP State", "Delinquent",
    "Software Client", "ASN", "ASN Provider", "Data Center",
]


class EmptyExportError(ValueError):
    """Nothing left to export after filtering."""


@dataclass(frozen=True)
class Notification:
    message: str
    is_error: bool = False


def _row(r: ValidatorRecord, total: int) -> List[str]:
    return [
        r.name,
        r.identity_key,
        r.vote_key,
        f"{r.stake / LAMPORTS_PER_SOL:.2f}",
        stake_percentage(r.stake, total),
        r.version or "unknown",
        minor_version_group(r.version),
        "Yes" if r.participant else "No",
        r.participation_state or "N/A",
        "Yes" if r.delinquent else "No",
        r.software_client or UNKNOWN,
        str(r.asn) if r.asn is not None else UNKNOWN,
        asn_provider(r.asn),
        r.data_center or UNKNOWN,
    ]


def build_csv(records: Sequence[ValidatorRecord], all_records: Optional[Sequence[ValidatorRecord]] = None) -> str:
    """
    Render the filtered+sorted records. Stake % is relative to all_records
    (the unfiltered set), defaulting to records itself.
    """
    if not records:
        raise EmptyExportError("No validators match the current filters")
    total = total_stake(records if all_records is None else all_records)

    buf = io.StringIO()
    w = csv.writer(buf, lineterminator="\r\n")
    w.writerow(HEADER)
    for r in records:
        w.writerow(_row(r, total))
    return BOM + buf.getvalue()


def export_csv(
    records: Sequence[ValidatorRecord],
    all_records: Optional[Sequence[ValidatorRecord]] = None,
) -> Tuple[Optional[str], Notification]:
    try:
        content = build_csv(records, all_records)
    except EmptyExportError as exc:
        logger.info("Export skipped: %s", exc)
        return None, Notification(f"Export failed: {exc}", is_error=True)
    return content, Notification(f"Exported {len(records)} validators")


def export_filename(day: Optional[date] = None) -> str:
    return f"validators-{(day or date.today()).isoformat()}.csv"


def copy_text(text: str, writer: Callable[[str], None], label: str = "Copied to clipboard") -> Notification:
    """
    Hand a ready string to a clipboard writer; its failure becomes an
    error notification instead of propagating.
    """
    if not text:
        return Notification("Nothing to copy", is_error=True)
    try:
        writer(text)
    except Exception as exc:
        logger.warning("Clipboard write failed: %s", exc)
        return Notification("Failed to copy to clipboard", is_error=True)
    return Notification(label)
