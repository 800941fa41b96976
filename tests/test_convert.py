from validator_explorer.convert import TO_IDENTITY, TO_VOTE, convert_keys, split_keys

from conftest import rec

RECORDS = [rec("id1"), rec("id2"), rec("id3")]


def test_identity_majority_converts_to_vote():
    report = convert_keys(["id1", "id2", "vote-id3"], RECORDS)
    assert report.ok
    assert report.direction == TO_VOTE
    assert report.as_text() == "vote-id1\nvote-id2\nvote-id3"


def test_vote_majority_converts_to_identity():
    report = convert_keys(["vote-id1", "vote-id2", "bogus"], RECORDS)
    assert report.direction == TO_IDENTITY
    assert [r.converted_key for r in report.results] == ["id1", "id2", "bogus"]
    assert report.results[2].is_error
    assert report.results[2].error_message == "Key not found in validator set"
    assert report.as_text() == "id1\nid2"
    assert "bogus" not in report.as_text()


def test_equal_split_is_an_error():
    report = convert_keys(["id1", "vote-id2"], RECORDS)
    assert not report.ok
    assert "equal number" in report.error


def test_no_keys_is_an_error():
    assert convert_keys(split_keys("\n  \n"), RECORDS).error == "Please enter at least one key"


def test_split_keys():
    assert split_keys(" a \n\nb\n") == ["a", "b"]
