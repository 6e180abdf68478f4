"""
Readers and writers for the supported formats, looked up by name

Each format reads a text stream into (line_number, item) pairs. Formats
with a header block yield the header first, exactly once, even when the
input has no header lines. Comment-like lines that are not records
(BED track lines, GFF3 directives, unknown GFA lines) are yielded as
Comment items and written back unchanged.
"""
from dataclasses import dataclass

from DshHelper import Bed, Gaf, Gff3, Gfa1, Gfa2, Sam, Vcf
from DshHelper.Constants import FASTA_LINE_WIDTH
from DshHelper.Errors import ParseError
from DshHelper.IO import check_utf8
from DshHelper.Sequence import read_sequences, write_fasta, write_fastq


@dataclass(frozen=True)
class Comment:
    line: str

    def __str__(self):
        return self.line


class Format:
    name = None
    has_header = False
    # item numbers are line numbers, not record numbers
    numbers_lines = True

    def read(self, fh, on_invalid=None):
        """
        Yield (line_number, item) pairs

        on_invalid - called with the ParseError of a malformed record;
          when it returns, the record is dropped and reading goes on.
          None makes malformed records fatal
        """
        raise NotImplementedError

    def write_header(self, header, fh):
        if header is None:
            return
        text = f"{header}"
        if text:
            fh.write(f"{text}\n")

    def write_record(self, record, fh):
        fh.write(f"{record}\n")


class LineFormat(Format):
    """
    One record per line; blank lines are skipped
    """
    header_prefixes = ()
    comment_prefixes = ()

    def make_header(self, lines):
        return None

    def parse_record(self, line):
        raise NotImplementedError

    def _locate(self, err, n):
        err.line_number = n
        err.record_type = self.name.upper()
        return err

    def parse_line(self, line):
        check_utf8(line)
        if self.comment_prefixes and line.startswith(self.comment_prefixes):
            return Comment(line)
        return self.parse_record(line)

    def read(self, fh, on_invalid=None):
        header_lines = []
        in_header = self.has_header
        n = 0
        for n, line in enumerate(fh, start=1):
            line = line.rstrip("\r\n")
            if in_header:
                if line.startswith(self.header_prefixes):
                    try:
                        header_lines.append(check_utf8(line))
                    except ParseError as e:
                        self._locate(e, n)
                        raise
                    continue
                in_header = False
                yield n - 1, self.make_header(header_lines)
            if not line.strip():
                continue
            try:
                item = self.parse_line(line)
            except ParseError as e:
                self._locate(e, n)
                if on_invalid is None:
                    raise
                on_invalid(e)
                continue
            yield n, item
        if in_header:
            yield n, self.make_header(header_lines)


class Gfa1Format(LineFormat):
    name = "gfa1"

    def parse_record(self, line):
        record = Gfa1.record_from_line(line)
        return Comment(line) if record is None else record


class Gfa2Format(LineFormat):
    name = "gfa2"

    def parse_record(self, line):
        record = Gfa2.record_from_line(line)
        return Comment(line) if record is None else record


class VcfFormat(LineFormat):
    name = "vcf"
    has_header = True
    header_prefixes = ("#",)

    def make_header(self, lines):
        return Vcf.VcfHeader.from_lines(lines)

    def parse_record(self, line):
        return Vcf.VcfRecord.from_line(line)


class SamFormat(LineFormat):
    """
    Records are parsed against the header read before them
    """
    name = "sam"
    has_header = True
    header_prefixes = ("@",)

    def __init__(self):
        self.header = None

    def make_header(self, lines):
        self.header = Sam.SamHeader.from_lines(lines)
        return self.header

    def parse_record(self, line):
        return Sam.SamRecord.from_line(line, self.header)


class GafFormat(LineFormat):
    name = "gaf"

    def parse_record(self, line):
        return Gaf.GafRecord.from_line(line)


class BedFormat(LineFormat):
    name = "bed"
    comment_prefixes = ("#", "track", "browser")

    def parse_record(self, line):
        return Bed.BedRecord.from_line(line)


class Gff3Format(LineFormat):
    name = "gff3"
    comment_prefixes = ("#",)

    def parse_record(self, line):
        return Gff3.Gff3Record.from_line(line)


class FastaFormat(Format):
    """
    Records are Biopython SeqRecords; malformed input is always fatal
    because the parser cannot resume after an error
    """
    name = "fasta"
    numbers_lines = False

    def __init__(self, line_width=FASTA_LINE_WIDTH):
        self.line_width = line_width

    def read(self, fh, on_invalid=None):
        yield from read_sequences(fh, self.name)

    def write_record(self, record, fh):
        write_fasta(record, fh, self.line_width)


class FastqFormat(Format):
    name = "fastq"
    numbers_lines = False

    def read(self, fh, on_invalid=None):
        yield from read_sequences(fh, self.name)

    def write_record(self, record, fh):
        write_fastq(record, fh)


FORMATS = {f.name: f for f in (Gfa1Format, Gfa2Format, VcfFormat, SamFormat,
    GafFormat, BedFormat, Gff3Format, FastaFormat, FastqFormat)}


def get_format(name, **kwargs):
    try:
        return FORMATS[name](**kwargs)
    except KeyError:
        raise ValueError(f"unknown format: {name}") from None
