import sys
from pathlib import Path

import pytest

# Ensure src/ is on sys.path so `import validator_explorer` works without an install.
SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from validator_explorer.records import ValidatorRecord  # noqa: E402

SOL = 10 ** 9


def rec(identity, stake=0, version="", **kw):
    return ValidatorRecord(
        identity_key=identity,
        vote_key=kw.pop("vote_key", f"vote-{identity}"),
        stake=stake,
        version=version,
        **kw,
    )


@pytest.fixture
def cluster():
    """Small enriched set: 100 SOL total, mixed encodings, clients, ASNs."""
    return [
        rec("a", 40 * SOL, "3.1.8", name="Alpha", participant=True, participation_state="Approved",
            asn=24940, data_center="24940-DE-Falkenstein", software_client="Agave"),
        rec("b", 20 * SOL, "0.811.30108", name="Bravo", participant=True, participation_state="Rejected",
            asn=16276, data_center="16276-FR-Roubaix", software_client="Firedancer"),
        rec("c", 10 * SOL, "2.2.14", name="Charlie", delinquent=True,
            asn=24940, data_center="24940-FI-Helsinki", software_client="JitoLabs"),
        rec("d", 30 * SOL, "", name="private validator"),
    ]
