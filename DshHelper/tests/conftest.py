# DshHelper/tests/conftest.py
import os
import pathlib
import subprocess
import sys

import pytest

REPO_ROOT = pathlib.Path(__file__).resolve().parents[2]

VCF_HEADER = (
    "##fileformat=VCFv4.3\n"
    '##INFO=<ID=DP,Number=1,Type=Integer,Description="Total depth">\n'
    '##INFO=<ID=DB,Number=1,Type=String,Description="dbSNP id">\n'
    '##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">\n'
    '##FORMAT=<ID=PS,Number=1,Type=String,Description="Phase set">\n'
    "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tNA1\tNA2\n"
)


@pytest.fixture
def vcf_text():
    return VCF_HEADER + (
        "chr1\t100\trs1\tA\tG\t10\tPASS\tDP=5;DB=rs1\tGT:PS\t0|1:blockA\t1|0:blockB\n"
        "chr1\t200\t.\tC\tT\t30\tPASS\tDP=9\tGT:PS\t0|1:blockB\t0/0:.\n"
        "chr2\t300\trs3;rs4\tG\tA,C\t50.5\tq10;lowDP\tDB=rs3\tGT:PS\t1|1:blockC\t0|1:blockA\n"
    )


@pytest.fixture
def sam_text():
    return (
        "@HD\tVN:1.6\tSO:coordinate\n"
        "@SQ\tSN:chr1\tLN:1000\n"
        "r1\t0\tchr1\t11\t60\t4M\t*\t0\t0\tACGT\tIIII\tNM:i:0\tRG:Z:grp1\n"
        "r2\t16\tchr1\t21\t10\t4M\t*\t0\t0\tACGT\t*\tXB:B:i,1,2,3\n"
        "r3\t4\t*\t0\t0\t*\t*\t0\t0\tACGT\tIIII\n"
    )


@pytest.fixture
def gfa1_text():
    return (
        "H\tVN:Z:1.0\n"
        "S\t1\tACGT\tRC:i:10\n"
        "S\t2\t*\tLN:i:8\tRC:i:2\n"
        "L\t1\t+\t2\t-\t2M\tMQ:i:30\tNM:i:1\n"
        "L\t1\t+\t3\t+\t*\n"
        "C\t1\t+\t2\t+\t1\t3M\n"
        "P\tp1\t1+,2-\t2M\n"
    )


def _script_env():
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        [str(REPO_ROOT)] + [p for p in [env.get("PYTHONPATH")] if p])
    return env


def _script_command(name, *args):
    return [sys.executable, str(REPO_ROOT / "scripts" / name), *args]


@pytest.fixture
def run_script():
    """
    Run a script from scripts/ in a subprocess with the repository on the
    module search path
    """
    def run(name, *args, stdin=""):
        return subprocess.run(_script_command(name, *args), input=stdin,
            capture_output=True, text=True, env=_script_env())
    return run


@pytest.fixture
def start_script():
    """
    Start a script without waiting for it, stdout and stderr piped
    """
    def start(name, *args):
        return subprocess.Popen(_script_command(name, *args),
            stdin=subprocess.DEVNULL, stdout=subprocess.PIPE,
            stderr=subprocess.PIPE, env=_script_env())
    return start
