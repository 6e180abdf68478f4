import pytest

from DshHelper import Cli
from DshHelper.Errors import ParseError
from DshHelper.Constants import EXIT_FAILURE, EXIT_OK


SAM_HEADER = "@SQ\tSN:chr1\tLN:1000\n"
SAM_RECORD = "r{}\t0\tchr1\t{}\t60\t1M\t*\t0\t0\tA\tI\n"


def _sam_with_bad_line_42():
    lines = [SAM_HEADER] + [SAM_RECORD.format(i, i) for i in range(1, 41)]
    lines.append("broken\t0\tchr1\t5\t60\n")
    lines.append(SAM_RECORD.format(99, 99))
    return "".join(lines)


def test_malformed_sam_line_42(run_script):
    text = _sam_with_bad_line_42()
    assert text.splitlines()[41].startswith("broken")
    proc = run_script("filter_sam.py", stdin=text)
    assert proc.returncode != 0
    assert "42" in proc.stderr


def test_filter_sam_mapq_and_range(run_script, sam_text):
    proc = run_script("filter_sam.py", "-q", "30", "-r", "chr1:0-100",
        stdin=sam_text)
    assert proc.returncode == 0
    body = [line for line in proc.stdout.splitlines()
        if not line.startswith("@")]
    assert [line.split("\t")[0] for line in body] == ["r1"]
    assert proc.stdout.startswith("@HD\tVN:1.6\tSO:coordinate\n@SQ")


def test_filter_vcf_qual(run_script, tmp_path):
    text = ("##fileformat=VCFv4.3\n"
        "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n"
        "chr1\t1\ta\tA\tG\t10.0\tPASS\t.\n"
        "chr1\t2\tb\tA\tG\t30.0\tPASS\t.\n"
        "chr1\t3\tc\tA\tG\t50.0\tPASS\t.\n")
    src = tmp_path / "in.vcf"
    src.write_text(text)
    dst = tmp_path / "out.vcf"
    proc = run_script("filter_vcf.py", "--qual", "25", "-i", str(src),
        "-o", str(dst))
    assert proc.returncode == 0
    lines = dst.read_text().splitlines()
    assert lines[:2] == text.splitlines()[:2]
    assert [line.split("\t")[2] for line in lines[2:]] == ["b", "c"]


def test_invalid_range_is_usage_error(run_script):
    proc = run_script("filter_bed.py", "-r", "chr1:10", stdin="")
    assert proc.returncode == 2
    assert "chrom:start-end" in proc.stderr
    assert "usage" in proc.stderr


def test_invalid_script_is_usage_error(run_script):
    proc = run_script("filter_gfa1.py", "-e", "__import__('os')", stdin="")
    assert proc.returncode == 2


def test_about_and_help(run_script):
    about = run_script("filter_gaf.py", "-a")
    assert about.returncode == 0
    assert "DshTools" in about.stdout
    assert run_script("traverse_paths.py", "-h").returncode == 0


def test_skip_invalid_records(run_script):
    text = "chr1\t1\t2\nchr1\tx\t3\nchr1\t4\t5\n"
    proc = run_script("filter_bed.py", "--invalid-records", "skip",
        stdin=text)
    assert proc.returncode == 0
    assert proc.stdout == "chr1\t1\t2\nchr1\t4\t5\n"
    assert "line 2" in proc.stderr


def test_run_maps_errors_to_exit_codes():
    def ok(argv):
        return EXIT_OK

    def fails(argv):
        raise ParseError("bad", line_number=3)

    def broken(argv):
        raise ValueError("not ours")

    assert Cli.run(ok) == EXIT_OK
    assert Cli.run(fails) == EXIT_FAILURE
    with pytest.raises(ValueError):
        Cli.run(broken)


def test_undecodable_input_names_line(run_script, tmp_path):
    src = tmp_path / "bad.bed"
    src.write_bytes(b"chr1\t1\t2\tok\nchr1\t1\t2\txx\xff\n")
    proc = run_script("filter_bed.py", "-i", str(src))
    assert proc.returncode == EXIT_FAILURE
    assert "Traceback" not in proc.stderr
    assert "BED record at line 2" in proc.stderr
    assert "0xff" in proc.stderr


def test_undecodable_record_can_be_skipped(run_script, tmp_path):
    src = tmp_path / "bad.bed"
    src.write_bytes(b"chr1\t1\t2\txx\xff\nchr1\t4\t5\n")
    proc = run_script("filter_bed.py", "--invalid-records", "skip",
        "-i", str(src))
    assert proc.returncode == EXIT_OK
    assert proc.stdout == "chr1\t4\t5\n"


def test_closed_downstream_pipe_exits_cleanly(start_script, tmp_path):
    src = tmp_path / "big.bed"
    src.write_text("".join(f"chr1\t{i}\t{i + 1}\n" for i in range(200000)))
    proc = start_script("filter_bed.py", "-i", str(src))
    assert proc.stdout.readline() == b"chr1\t0\t1\n"
    proc.stdout.close()
    stderr = proc.stderr.read()
    proc.stderr.close()
    assert proc.wait() == EXIT_OK
    assert b"Traceback" not in stderr
