from validator_explorer.aggregate import (
    aggregate,
    asn_options,
    by_client,
    by_data_center,
    by_version,
    client_key,
    participation_states,
    stake_percentage,
    stake_summary,
    total_stake,
    version_groups,
)

from conftest import SOL, rec


def test_stake_percentage_formatting():
    assert stake_percentage(1, 3) == "33.33"
    assert stake_percentage(0, 0) == "0.00"
    assert stake_percentage(5, 0) == "0.00"


def test_mixed_encodings_share_a_group(cluster):
    groups = version_groups(cluster)
    g31 = next(g for g in groups if g.group == "3.1")
    assert {v.key for v in g31.versions} == {"3.1.8", "0.811.30108"}
    assert g31.stake_sum == 60 * SOL
    assert g31.stake_percentage == "60.00"


def test_unknown_group_last_despite_share(cluster):
    groups = version_groups(cluster)
    assert [g.group for g in groups] == ["3.1", "2.2", "unknown"]
    assert groups[-1].stake_percentage == "30.00"
    assert groups[-1].versions[0].key == "unknown"


def test_group_version_and_total_sums_agree(cluster):
    groups = version_groups(cluster)
    versions = by_version(cluster)
    assert sum(g.stake_sum for g in groups) == sum(v.stake_sum for v in versions) == total_stake(cluster)


def test_versions_within_group_descending():
    records = [rec("a", 1, "3.1.2"), rec("b", 1, "0.811.30110"), rec("c", 1, "3.1.9")]
    (g,) = version_groups(records)
    assert [v.key for v in g.versions] == ["0.811.30110", "3.1.9", "3.1.2"]


def test_filtered_numerator_full_denominator(cluster):
    subset = [r for r in cluster if r.participant]
    shares = by_client(subset, cluster)
    assert [(s.key, s.stake_percentage) for s in shares] == [("Agave", "40.00"), ("Firedancer", "20.00")]


def test_other_partitions_sort_by_stake_then_first_seen():
    records = [rec("a", 5, software_client="X"), rec("b", 5, software_client="Y"),
               rec("c", 9), rec("d", 0, software_client="X")]
    assert [s.key for s in aggregate(records, client_key)] == ["Unknown", "X", "Y"]


def test_data_center_and_asn_unknown_bucket(cluster):
    assert by_data_center(cluster)[0].key == "24940-DE-Falkenstein"
    asns = {s.key: s.stake_sum for s in asn_options(cluster)}
    assert asns == {"24940": 50 * SOL, "16276": 20 * SOL, "Unknown": 30 * SOL}


def test_zero_total_stake():
    records = [rec("a", 0, "3.1.8"), rec("b", 0, "")]
    assert all(g.stake_percentage == "0.00" for g in version_groups(records))


def test_stake_summary(cluster):
    s = stake_summary(cluster[:1], cluster)
    assert s.matching_percentage == "40.00"
    assert s.participant_percentage == "60.00"
    assert s.total_stake == 100 * SOL


def test_participation_states(cluster):
    assert participation_states(cluster) == ["Approved", "Rejected"]
