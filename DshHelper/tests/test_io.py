import bz2
import gzip

import pysam

from DshHelper.Formats import VcfFormat
from DshHelper.IO import open_input, open_output
from DshHelper.Pipeline import Pipeline


def test_plain_roundtrip(tmp_path):
    path = tmp_path / "x.txt"
    with open_output(str(path)) as fh:
        fh.write("a\tb\n")
    with open_input(str(path)) as fh:
        assert fh.read() == "a\tb\n"


def test_bgzf_output_is_readable_as_gzip(tmp_path):
    path = tmp_path / "x.vcf.gz"
    with open_output(str(path)) as fh:
        fh.write("line1\n")
        fh.write("line2\n")
    with gzip.open(path, "rt") as fh:
        assert fh.read() == "line1\nline2\n"
    with open_input(str(path)) as fh:
        assert fh.read() == "line1\nline2\n"


def test_bgzf_output_is_readable_by_pysam(tmp_path):
    path = tmp_path / "x.bgz"
    with open_output(str(path)) as fh:
        fh.write("hello\n")
    with pysam.BGZFile(str(path), "rb") as fh:
        assert fh.read() == b"hello\n"


def test_bzip2(tmp_path):
    path = tmp_path / "x.bz2"
    with open_output(str(path)) as fh:
        fh.write("compressed\n")
    with bz2.open(path, "rt") as fh:
        assert fh.read() == "compressed\n"
    with open_input(str(path)) as fh:
        assert fh.read() == "compressed\n"


def test_pipeline_compressed_input_and_output(tmp_path, vcf_text):
    src = tmp_path / "in.vcf.gz"
    dst = tmp_path / "out.vcf.bgz"
    with gzip.open(src, "wt") as fh:
        fh.write(vcf_text)
    Pipeline(VcfFormat(), input_path=str(src), output_path=str(dst)).run()
    with gzip.open(dst, "rt") as fh:
        assert fh.read() == vcf_text
