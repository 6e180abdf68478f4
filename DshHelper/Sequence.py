"""
FASTA and FASTQ reading and writing through Biopython
"""
from Bio import SeqIO
from Bio.SeqIO.FastaIO import FastaWriter
from Bio.SeqIO.QualityIO import as_fastq

from DshHelper.Constants import FASTA_LINE_WIDTH
from DshHelper.Errors import ParseError
from DshHelper.IO import check_utf8


def read_sequences(fh, fmt):
    """
    Iterate SeqRecords, malformed input is reported as ParseError with
    the 1-based number of the record that could not be read
    """
    it = SeqIO.parse(fh, fmt)
    n = 0
    while True:
        n += 1
        try:
            rec = next(it)
        except StopIteration:
            return
        except ValueError as e:
            raise ParseError(str(e), record_number=n,
                record_type=fmt.upper()) from e
        try:
            check_utf8(rec.description)
            check_utf8(str(rec.seq))
        except ParseError as e:
            e.record_number = n
            e.record_type = fmt.upper()
            raise
        yield n, rec


def write_fasta(rec, fh, line_width=FASTA_LINE_WIDTH):
    """
    line_width 0 writes each sequence on a single line
    """
    FastaWriter(fh, wrap=line_width or None).write_record(rec)


def write_fastq(rec, fh):
    fh.write(as_fastq(rec))
