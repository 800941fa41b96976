from validator_explorer.enrich import Infrastructure, Participation, merge
from validator_explorer.records import PRIVATE_VALIDATOR

from conftest import rec


def _snapshot():
    return [rec("id1", 5, "3.1.8"), rec("id2", 7, "2.2.1"), rec("id3", 9, "")]


def test_merge_all_tables():
    names = {"vote-id1": "Alpha", "vote-id2": "Bravo"}
    part = {"id1": Participation(True, "Approved")}
    infra = {"vote-id2": Infrastructure(24940, "24940-DE-Falkenstein", "Agave")}

    out = merge(_snapshot(), names, part, infra)

    assert [r.identity_key for r in out] == ["id1", "id2", "id3"]
    a, b, c = out
    assert a.name == "Alpha" and a.participant and a.participation_state == "Approved"
    assert a.asn is None and a.data_center is None and a.software_client is None
    assert b.name == "Bravo" and not b.participant and b.participation_state is None
    assert (b.asn, b.data_center, b.software_client) == (24940, "24940-DE-Falkenstein", "Agave")
    assert c.name == PRIVATE_VALIDATOR


def test_merge_with_no_tables_keeps_every_record():
    snap = _snapshot()
    out = merge(snap, None, {}, None)
    assert len(out) == len(snap)
    assert all(r.name == PRIVATE_VALIDATOR and not r.participant for r in out)
    assert [r.stake for r in out] == [5, 7, 9]


def test_merge_keys_use_their_own_namespace():
    # names/infra are keyed by vote key, participation by identity key
    names = {"id1": "wrong"}
    part = {"vote-id1": Participation(True, "Approved")}
    out = merge(_snapshot(), names, part, {"id1": Infrastructure(1, "x", "y")})
    assert out[0].name == PRIVATE_VALIDATOR
    assert not out[0].participant
    assert out[0].asn is None


def test_merge_does_not_mutate_input():
    snap = _snapshot()
    merge(snap, {"vote-id1": "Alpha"}, {}, {})
    assert snap[0].name == PRIVATE_VALIDATOR


def test_partial_infra_fields():
    out = merge(_snapshot(), {}, {}, {"vote-id3": Infrastructure(None, "dc", None)})
    assert (out[2].asn, out[2].data_center, out[2].software_client) == (None, "dc", None)
