import glob
from setuptools import setup

setup (name = 'DshTools',
       version = '0.1',
       description = 'Streaming filter and rewrite tools for GFA, VCF, SAM, '
           'GAF, BED, GFF3, FASTA and FASTQ files',
       packages = ['DshHelper'],
       scripts = glob.glob("scripts/*.py"),
       python_requires = '>=3.9',
       install_requires = ['pysam', 'biopython>=1.80'],
       extras_require = {'test': ['pytest']})
