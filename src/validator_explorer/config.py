# src/validator_explorer/config.py
# SPDX-License-Identifier: MIT

"""
Runtime settings, read from the environment.

  SNAPSHOT_PATH               validator snapshot JSON  [default: data/validators.json]
  NAME_REGISTRY_URL           vote key → name list      [default: Stakewiz]
  PARTICIPATION_REGISTRY_URL  SFDP participant list     [default: solana.org]
  INFRA_REGISTRY_URL          vote key → ASN / DC / client  [optional, no default]
  TIMEOUT_S                   per-registry timeout      [default: 8.0]
  MAX_WORKERS                 parallel registry fetches [default: 3]
  LOG_LEVEL                   logging level name        [default: WARNING]
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

# ---------------------------
# Public defaults
# ---------------------------
DEFAULT_SNAPSHOT_PATH = "data/validators.json"
DEFAULT_NAME_REGISTRY_URL = "https://api.stakewiz.com/validators"
DEFAULT_PARTICIPATION_REGISTRY_URL = "https://api.solana.org/api/community/v1/sfdp_participants"
DEFAULT_TIMEOUT_S = 8.0
DEFAULT_MAX_WORKERS = 3
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    snapshot_path: str = DEFAULT_SNAPSHOT_PATH
    name_registry_url: str = DEFAULT_NAME_REGISTRY_URL
    participation_registry_url: str = DEFAULT_PARTICIPATION_REGISTRY_URL
    infra_registry_url: str = ""
    timeout_s: float = DEFAULT_TIMEOUT_S
    max_workers: int = DEFAULT_MAX_WORKERS
    log_level: str = DEFAULT_LOG_LEVEL


def _float(value: Optional[str], default: float) -> float:
    try:
        f = float(value) if value else default
    except ValueError:
        return default
    return f if f > 0 else default


def _int(value: Optional[str], default: int) -> int:
    try:
        n = int(value) if value else default
    except ValueError:
        return default
    return n if n > 0 else default


def _level(value: Optional[str]) -> str:
    name = (value or DEFAULT_LOG_LEVEL).strip().upper()
    return name if isinstance(logging.getLevelName(name), int) else DEFAULT_LOG_LEVEL


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from env (os.environ by default); bad numbers fall back."""
    env = os.environ if env is None else env
    return Settings(
        snapshot_path=env.get("SNAPSHOT_PATH") or DEFAULT_SNAPSHOT_PATH,
        name_registry_url=env.get("NAME_REGISTRY_URL", DEFAULT_NAME_REGISTRY_URL),
        participation_registry_url=env.get("PARTICIPATION_REGISTRY_URL", DEFAULT_PARTICIPATION_REGISTRY_URL),
        infra_registry_url=env.get("INFRA_REGISTRY_URL", ""),
        timeout_s=_float(env.get("TIMEOUT_S"), DEFAULT_TIMEOUT_S),
        max_workers=_int(env.get("MAX_WORKERS"), DEFAULT_MAX_WORKERS),
        log_level=_level(env.get("LOG_LEVEL")),
    )
