# src/validator_explorer/sources.py
# SPDX-License-Identifier: MIT

"""
Registry fetchers (name, participation, infrastructure).

The three registries are independent: they are fetched in parallel and a
failure or timeout in one only empties that one table. merge() copes with
any subset being empty.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, NamedTuple, Optional

import requests

from .config import Settings
from .enrich import Infrastructure, Participation

logger = logging.getLogger(__name__)

# Reuse one Requests session for all registries
S = requests.Session()


class EnrichmentTables(NamedTuple):
    names: Dict[str, str]
    participation: Dict[str, Participation]
    infra: Dict[str, Infrastructure]


# ---------------------------
# Payload decoding
# ---------------------------
def _rows(payload: object) -> List[dict]:
    if isinstance(payload, dict):
        for k in ("data", "validators", "participants"):
            if isinstance(payload.get(k), list):
                payload = payload[k]
                break
    if not isinstance(payload, list):
        return []
    return [row for row in payload if isinstance(row, dict)]


def _opt_int(value: object) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return None


def _opt_str(value: object) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def name_table_from(payload: object) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for row in _rows(payload):
        vote = row.get("vote_identity")
        name = _opt_str(row.get("name"))
        if vote and name:
            out[str(vote)] = name
    return out


def participation_table_from(payload: object) -> Dict[str, Participation]:
    out: Dict[str, Participation] = {}
    for row in _rows(payload):
        identity = row.get("mainnetBetaPubkey")
        if identity:
            out[str(identity)] = Participation(True, _opt_str(row.get("state")))
    return out


def infra_table_from(payload: object) -> Dict[str, Infrastructure]:
    out: Dict[str, Infrastructure] = {}
    for row in _rows(payload):
        vote = row.get("vote_identity") or row.get("voteAccountPubkey")
        if not vote:
            continue
        asn = row.get("asn") if row.get("asn") is not None else row.get("ip_asn")
        client = row.get("software_client") if row.get("software_client") is not None else row.get("client")
        out[str(vote)] = Infrastructure(
            asn=_opt_int(asn),
            data_center=_opt_str(row.get("data_center_key")),
            software_client=_opt_str(client),
        )
    return out


# ---------------------------
# HTTP reads
# ---------------------------
def _get_json(url: str, timeout_s: float) -> object:
    r = S.get(url, timeout=timeout_s)
    r.raise_for_status()
    return r.json()


def fetch_name_table(url: str, timeout_s: float) -> Dict[str, str]:
    return name_table_from(_get_json(url, timeout_s))


def fetch_participation_table(url: str, timeout_s: float) -> Dict[str, Participation]:
    return participation_table_from(_get_json(url, timeout_s))


def fetch_infra_table(url: str, timeout_s: float) -> Dict[str, Infrastructure]:
    return infra_table_from(_get_json(url, timeout_s))


def fetch_enrichment(settings: Settings) -> EnrichmentTables:
    """
    Fetch all configured registries in parallel.
    An unconfigured URL, an HTTP error, a timeout or a bad payload each
    degrade only that registry's table to {}.
    """
    jobs: Dict[str, tuple] = {
        "names": (fetch_name_table, settings.name_registry_url),
        "participation": (fetch_participation_table, settings.participation_registry_url),
        "infra": (fetch_infra_table, settings.infra_registry_url),
    }
    results: Dict[str, dict] = {k: {} for k in jobs}

    def work(label: str, fn: Callable[[str, float], dict], url: str) -> dict:
        if not url:
            logger.info("No URL configured for %s registry; skipping", label)
            return {}
        try:
            table = fn(url, settings.timeout_s)
        except Exception as exc:
            # conservative fallback: this registry only
            logger.warning("Registry %s unavailable (%s): %s", label, url, exc)
            return {}
        logger.info("Registry %s: %d entries", label, len(table))
        return table

    with ThreadPoolExecutor(max_workers=settings.max_workers) as ex:
        futs = {label: ex.submit(work, label, fn, url) for label, (fn, url) in jobs.items()}
        for label, f in futs.items():
            results[label] = f.result()

    return EnrichmentTables(results["names"], results["participation"], results["infra"])
