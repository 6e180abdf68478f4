import io

from DshHelper.Remap import RemapDbSnp, RemapPhaseSet, DB_FLAG_LINE, DBSNP_LINE


def _run(pipeline, text):
    out = io.StringIO()
    pipeline.process(io.StringIO(text), out)
    return out.getvalue().splitlines()


def test_remap_dbsnp(vcf_text):
    lines = _run(RemapDbSnp(), vcf_text)
    i = lines.index(DB_FLAG_LINE)
    assert lines[i + 1] == DBSNP_LINE
    assert not any("Description=\"dbSNP id\"" in line for line in lines)
    records = [line.split("\t") for line in lines if not line.startswith("#")]
    assert records[0][7] == "DP=5;DB;dbsnp=rs1"
    assert records[1][7] == "DP=9"
    assert records[2][7] == "DB;dbsnp=rs3"


def test_remap_dbsnp_flag_declaration_passes_through(vcf_text):
    text = vcf_text.replace("Number=1,Type=String,Description=\"dbSNP id\"",
        "Number=0,Type=Flag,Description=\"dbSNP id\"")
    text = text.replace("DB=rs1", "DB").replace("DB=rs3", "DB")
    assert _run(RemapDbSnp(), text) == text.splitlines()


def test_remap_phase_set(vcf_text):
    lines = _run(RemapPhaseSet(), vcf_text)
    assert ('##FORMAT=<ID=PS,Number=1,Type=Integer,Description="Phase set '
        '(converted from Type=String to Type=Integer)">') in lines
    records = [line.split("\t") for line in lines if not line.startswith("#")]
    # blockA, blockB, blockC numbered in order of first appearance
    assert records[0][9:] == ["0|1:0", "1|0:1"]
    assert records[1][9:] == ["0|1:1", "0/0:."]
    assert records[2][9:] == ["1|1:2", "0|1:0"]


def test_remap_phase_set_integer_declaration_passes_through(vcf_text):
    text = vcf_text.replace("ID=PS,Number=1,Type=String",
        "ID=PS,Number=1,Type=Integer")
    p = RemapPhaseSet()
    assert _run(p, text) == text.splitlines()
    assert p.phase_set_ids == {}


def test_remap_dbsnp_flag_record_gets_no_identifier(vcf_text):
    text = vcf_text.replace("DB=rs3", "DB;dbsnp=rs9")
    lines = _run(RemapDbSnp(), text)
    records = [line.split("\t") for line in lines if not line.startswith("#")]
    assert records[0][7] == "DP=5;DB;dbsnp=rs1"
    assert records[2][7] == "DB;dbsnp=rs9"
