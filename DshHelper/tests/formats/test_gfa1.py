import io

import pytest

from DshHelper.Errors import ParseError
from DshHelper.Formats import Comment, Gfa1Format
from DshHelper.Gfa1 import (Header, Segment, Link, Containment, Path,
    Traversal, Reference, record_from_line, segment_ids)


def test_read_all_record_types(gfa1_text):
    text = gfa1_text + "T\tp1\t0\t1\t+\t2\t-\t2M\n# comment\nX\tunknown\n"
    items = [item for n, item in Gfa1Format().read(io.StringIO(text))]
    kinds = [type(i) for i in items]
    assert kinds == [Header, Segment, Segment, Link, Link, Containment, Path,
        Traversal, Comment, Comment]


def test_segment_length_and_counts(gfa1_text):
    s1 = record_from_line("S\t1\tACGT\tRC:i:10")
    s2 = record_from_line("S\t2\t*\tLN:i:8\tRC:i:2")
    s3 = record_from_line("S\t3\t*")
    assert s1.length == 4 and s1.read_count == 10
    assert s2.length == 8 and s2.sequence is None
    assert s3.length is None and s3.read_count is None


def test_link_fields():
    link = record_from_line("L\t1\t+\t2\t-\t2M\tMQ:i:30\tNM:i:1")
    assert link.source == Reference("1", "+")
    assert link.target == Reference("2", "-")
    assert link.overlap == "2M"
    assert link.mapping_quality == 30 and link.mismatch_count == 1
    assert segment_ids(link) == ("1", "2")


def test_path_fields():
    path = record_from_line("P\tp1\t1+,2-,3+\t2M,*")
    assert [str(s) for s in path.segments] == ["1+", "2-", "3+"]
    assert path.overlaps == ("2M", "*")
    assert record_from_line("P\tp2\t1+\t*").overlaps is None


def test_tag_value_may_contain_colons():
    h = record_from_line("H\tVN:Z:1.0\tXX:Z:a:b:c")
    assert h.tag("XX") == "a:b:c"


@pytest.mark.parametrize("line", [
    "H\tVN:Z:1.0",
    "S\t1\tACGT\tRC:i:10\tLN:i:4",
    "S\t2\t*",
    "L\t1\t+\t2\t-\t*\tMQ:i:3",
    "C\t1\t+\t2\t-\t10\t4M",
    "P\tp1\t1+,2-\t4M",
    "T\tp1\t0\t1\t+\t2\t-\t*\tXY:f:0.5",
])
def test_roundtrip(line):
    r = record_from_line(line)
    assert record_from_line(str(r)) == r
    assert str(r) == line


@pytest.mark.parametrize("line", [
    "S\t1",
    "L\t1\t+\t2\tx\t*",
    "C\t1\t+\t2\t+\tten\t*",
    "S\t1\tA\tbad-tag",
])
def test_malformed(line):
    with pytest.raises(ParseError):
        record_from_line(line)


def test_malformed_line_number():
    text = "H\tVN:Z:1.0\nS\t1\tA\nL\t1\t+\n"
    with pytest.raises(ParseError) as e:
        list(Gfa1Format().read(io.StringIO(text)))
    assert e.value.line_number == 3
