# src/validator_explorer/asn.py
# SPDX-License-Identifier: MIT

"""Autonomous-system number → hosting provider names (static table)."""

from typing import Dict, Optional

from .records import UNKNOWN

ASN_PROVIDERS: Dict[int, str] = {
    24940: "Hetzner",
    16276: "OVH",
    14061: "DigitalOcean",
    20473: "Vultr",
    396356: "Latitude.sh",
    13335: "Cloudflare",
    15169: "Google",
    16509: "Amazon",
    8075: "Microsoft",
    36352: "ColoCrossing",
    55720: "Gigabit Hosting",
}


def asn_provider(asn: Optional[int]) -> str:
    if asn is None:
        return UNKNOWN
    return ASN_PROVIDERS.get(asn, UNKNOWN)


def asn_display(asn: Optional[int]) -> str:
    """Provider plus number, e.g. Hetzner (24940); bare number if unlisted."""
    if asn is None:
        return UNKNOWN
    provider = ASN_PROVIDERS.get(asn)
    return f"{provider} ({asn})" if provider else str(asn)
