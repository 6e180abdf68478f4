import io

import pytest

from DshHelper.Errors import ParseError
from DshHelper.Formats import SamFormat
from DshHelper.Sam import SamHeader, SamRecord

HEADER = SamHeader(["@HD\tVN:1.6", "@SQ\tSN:chr1\tLN:1000",
    "@SQ\tSN:chr2\tLN:500"])


def test_read_header_and_records(sam_text):
    items = [item for n, item in SamFormat().read(io.StringIO(sam_text))]
    header = items[0]
    assert isinstance(header, SamHeader)
    assert header.references == (("chr1", 1000),)
    assert f"{header}" == "@HD\tVN:1.6\tSO:coordinate\n@SQ\tSN:chr1\tLN:1000"
    r1, r2, r3 = items[1:]
    assert r1.qname == "r1" and r1.pos == 11 and r1.mapq == 60
    assert r1.cigar == "4M" and r1.seq == "ACGT" and r1.qual == "IIII"
    assert r1.tag("NM") == 0 and r1.tag("RG") == "grp1"
    assert r1.tags == {"NM": 0, "RG": "grp1"}
    assert r1.interval == ("chr1", 10, 11)
    assert r2.is_reverse and r2.qual is None
    assert r2.tag("XB") == (1, 2, 3)
    assert r2.tag("XX", "none") == "none"
    assert r3.is_unmapped and r3.rname is None and r3.pos is None
    assert r3.interval is None


@pytest.mark.parametrize("line", [
    "r1\t0\tchr1\t11\t60\t4M\t*\t0\t0\tACGT\tIIII\tNM:i:0\tRG:Z:grp1",
    "r3\t4\t*\t0\t0\t*\t*\t0\t0\tACGT\tIIII",
    "r4\t99\tchr2\t5\t255\t2M1I1M\t=\t50\t49\tACGT\t*\tXF:f:1.5",
])
def test_roundtrip(line):
    r = SamRecord.from_line(line, HEADER)
    assert str(r) == line
    assert SamRecord.from_line(str(r), HEADER) == r


def test_mate_fields():
    r = SamRecord.from_line(
        "r4\t99\tchr2\t5\t255\t2M1I1M\t=\t50\t49\tACGT\t*", HEADER)
    assert r.rnext == "chr2" and r.pnext == 50 and r.tlen == 49
    assert r.flag == 99 and not r.is_unmapped


def test_missing_field_reports_line():
    text = "@HD\tVN:1.6\nr1\t0\tchr1\t11\t60\t4M\t*\t0\t0\tACGT\n"
    with pytest.raises(ParseError) as e:
        list(SamFormat().read(io.StringIO(text)))
    assert e.value.line_number == 2
    assert "SAM record at line 2" in str(e.value)


def test_undeclared_reference():
    with pytest.raises(ParseError) as e:
        SamRecord.from_line("r1\t0\tchr9\t1\t60\t1M\t*\t0\t0\tA\tI", HEADER)
    assert e.value.token == "chr9"


def test_malformed_flag_rejected_by_pysam():
    text = "@SQ\tSN:chr1\tLN:10\nr1\tx\tchr1\t1\t60\t1M\t*\t0\t0\tA\tI\n"
    with pytest.raises(ParseError) as e:
        list(SamFormat().read(io.StringIO(text)))
    assert e.value.line_number == 2