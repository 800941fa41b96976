import csv
import io
from datetime import date

import pytest

from validator_explorer.asn import asn_display, asn_provider
from validator_explorer.export import (
    BOM,
    HEADER,
    EmptyExportError,
    build_csv,
    copy_text,
    export_csv,
    export_filename,
)

from conftest import rec


def _rows(content):
    assert content.startswith(BOM)
    return list(csv.reader(io.StringIO(content[len(BOM):])))


def test_export_header_and_values(cluster):
    content = build_csv(cluster[:2], cluster)
    rows = _rows(content)
    assert rows[0] == HEADER
    alpha = dict(zip(HEADER, rows[1]))
    assert alpha["Stake (SOL)"] == "40.00"
    assert alpha["Stake %"] == "40.00"
    assert alpha["Minor Group"] == "3.1"
    assert alpha["ASN"] == "24940"
    assert alpha["ASN Provider"] == "Hetzner"
    assert alpha["SFDP State"] == "Approved"
    bravo = dict(zip(HEADER, rows[2]))
    assert bravo["Version"] == "0.811.30108"
    assert bravo["Minor Group"] == "3.1"
    assert len(rows) == 3


def test_missing_infra_exports_unknown(cluster):
    rows = _rows(build_csv([cluster[3]], cluster))
    d = dict(zip(HEADER, rows[1]))
    assert d["Software Client"] == "Unknown"
    assert d["ASN"] == "Unknown"
    assert d["ASN Provider"] == "Unknown"
    assert d["Data Center"] == "Unknown"
    assert d["Version"] == "unknown"
    assert d["SFDP State"] == "N/A"


def test_fields_are_quoted_and_escaped():
    r = rec("id1", 10 ** 9, "3.1.8", name='Say "hi", ok\nbye')
    content = build_csv([r])
    assert '"Say ""hi"", ok\nbye"' in content
    assert _rows(content)[1][0] == 'Say "hi", ok\nbye'


def test_empty_export_notifies_and_produces_nothing(cluster):
    with pytest.raises(EmptyExportError):
        build_csv([], cluster)
    content, note = export_csv([], cluster)
    assert content is None
    assert note.is_error
    assert "No validators" in note.message


def test_export_success_notification(cluster):
    content, note = export_csv(cluster, cluster)
    assert content is not None
    assert not note.is_error
    assert note.message == "Exported 4 validators"


def test_export_filename():
    assert export_filename(date(2026, 1, 2)) == "validators-2026-01-02.csv"


def test_copy_text():
    copied = []
    assert not copy_text("abc", copied.append).is_error
    assert copied == ["abc"]

    def broken(_):
        raise OSError("no clipboard")

    assert copy_text("abc", broken).is_error
    assert copy_text("", copied.append).is_error


def test_asn_lookup():
    assert asn_provider(16276) == "OVH"
    assert asn_provider(1) == "Unknown"
    assert asn_provider(None) == "Unknown"
    assert asn_display(24940) == "Hetzner (24940)"
    assert asn_display(1) == "1"
    assert asn_display(None) == "Unknown"


@pytest.mark.parametrize("name", ["a\rb", "a\r\nb", "a\nb"])
def test_line_breaks_in_fields_are_quoted(name):
    content = build_csv([rec("id1", 10 ** 9, "3.1.8", name=name)])
    assert f'"{name}"' in content
    rows = _rows(content)
    assert len(rows) == 2
    assert rows[1][0] == name
    assert rows[1][1] == "id1"
