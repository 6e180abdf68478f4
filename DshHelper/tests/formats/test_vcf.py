import io

import pytest

from DshHelper.Errors import ParseError
from DshHelper.Formats import VcfFormat
from DshHelper.Vcf import VcfHeader, VcfRecord, MetaField, format_qual


def _records(text):
    return [item for n, item in VcfFormat().read(io.StringIO(text))]


def test_header_is_yielded_first(vcf_text):
    items = _records(vcf_text)
    header = items[0]
    assert isinstance(header, VcfHeader)
    assert header.samples == ("NA1", "NA2")
    assert header.info["DB"].type == "String"
    assert header.format["PS"].description == "Phase set"
    assert all(isinstance(r, VcfRecord) for r in items[1:])
    assert len(items) == 4


def test_record_fields(vcf_text):
    r = _records(vcf_text)[3]
    assert r.chrom == "chr2"
    assert r.pos == 300
    assert r.ids == ("rs3", "rs4")
    assert r.alt == ("A", "C")
    assert r.qual == 50.5
    assert r.filters == ("q10", "lowDP")
    assert r.info == {"DB": ("rs3",)}
    assert r.format == ("GT", "PS")
    assert r.genotypes[1] == {"GT": "0|1", "PS": "blockA"}
    assert r.interval == ("chr2", 299, 300)


def test_missing_values_and_flags():
    line = "chr1\t5\t.\tA\t.\t.\t.\tSOMATIC;END=10"
    r = VcfRecord.from_line(line)
    assert r.ids == () and r.alt == () and r.qual is None and r.filters == ()
    assert r.info == {"SOMATIC": (), "END": ("10",)}
    assert r.info_value("SOMATIC") is True
    assert r.info_value("END") == "10"
    assert r.format is None
    assert str(r) == line


@pytest.mark.parametrize("line", [
    "chr1\t100\trs1\tA\tG\t10\tPASS\tDP=5;DB=rs1\tGT:PS\t0|1:blockA\t1|0:x",
    "chr1\t7\t.\tAT\tA\t12.25\t.\t.",
    "chrX\t1\tid1;id2\tN\t<DEL>\t.\tPASS\tSVTYPE=DEL;CIPOS=-5,5",
    "chr1\t9\t.\tA\tC\t3\tPASS\t.\tGT:DP\t0/1\t1/1:4",
])
def test_roundtrip(line):
    r = VcfRecord.from_line(line)
    assert VcfRecord.from_line(str(r)) == r
    assert str(r) == line


def test_qual_formatting():
    assert format_qual(None) == "."
    assert format_qual(30.0) == "30"
    assert format_qual(30.5) == "30.5"


@pytest.mark.parametrize("line, token", [
    ("chr1\tx\t.\tA\tG\t10\tPASS\t.", "x"),
    ("chr1\t5\t.\tA\tG\tbad\tPASS\t.", "bad"),
])
def test_type_errors_carry_token(line, token):
    with pytest.raises(ParseError) as e:
        VcfRecord.from_line(line)
    assert e.value.token == token


def test_too_few_columns_reports_line_number(vcf_text):
    text = vcf_text + "chr3\t1\t.\tA\n"
    with pytest.raises(ParseError) as e:
        _records(text)
    assert e.value.line_number == 10
    assert "line 10" in str(e.value)


def test_meta_field_line():
    line = MetaField.format_line("INFO", "X", "1", "String", 'say "hi"')
    mf = MetaField.from_line(line)
    assert mf.id == "X" and mf.type == "String"
    assert mf.description == 'say "hi"'


def test_header_replace_line(vcf_text):
    header = _records(vcf_text)[0]
    db = header.info["DB"]
    new = header.replace_line(db.line, ("##a", "##b"))
    assert len(new.lines) == len(header.lines) + 1
    assert "##a\n##b" in str(new)
    assert db.line not in new.lines
