"""
VCF header and variant records

Header: ## meta lines followed by the #CHROM column line.
Record columns: CHROM POS ID REF ALT QUAL FILTER INFO [FORMAT samples...]
Missing values are written as "."
"""
from dataclasses import dataclass, field
import re
from types import MappingProxyType
from typing import Dict, Optional, Tuple

from DshHelper.Constants import MISSING
from DshHelper.Errors import ParseError

MANDATORY_COLUMNS = ("#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER",
    "INFO")
META_RE = re.compile(r"^##(\w+)=<(.*)>$")
META_FIELD_RE = re.compile(r'(\w+)=("(?:[^"\\]|\\.)*"|[^,]*)')


def read_meta_fields(text):
    """
    key=value pairs of a structured meta line, quotes removed
    """
    fields = {}
    for m in META_FIELD_RE.finditer(text):
        value = m.group(2)
        if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
            value = value[1:-1].replace('\\"', '"')
        fields[m.group(1)] = value
    return fields


@dataclass(frozen=True)
class MetaField:
    """
    INFO or FORMAT declaration
    """
    kind: str
    id: str
    number: str
    type: str
    description: str
    line: str

    @classmethod
    def from_line(cls, line):
        m = META_RE.match(line)
        if m is None:
            return None
        fields = read_meta_fields(m.group(2))
        return cls(m.group(1), fields.get("ID"), fields.get("Number"),
            fields.get("Type"), fields.get("Description"), line)

    @staticmethod
    def format_line(kind, field_id, number, field_type, description):
        description = description.replace('"', '\\"')
        return (f'##{kind}=<ID={field_id},Number={number},Type={field_type},'
            f'Description="{description}">')


@dataclass(frozen=True)
class VcfHeader:
    """
    lines - meta lines and the column line, without line terminators
    """
    lines: Tuple[str, ...] = ()

    @classmethod
    def from_lines(cls, lines):
        lines = tuple(lines)
        for i, line in enumerate(lines):
            if not line.startswith("##") and not line.startswith("#CHROM"):
                raise ParseError("header line must start with ## or #CHROM",
                    line, line_number=i + 1, record_type="VCF")
        return cls(lines)

    def _declarations(self, kind):
        declared = {}
        for line in self.lines:
            if line.startswith(f"##{kind}=<"):
                mf = MetaField.from_line(line)
                if mf is not None and mf.id is not None:
                    declared[mf.id] = mf
        return declared

    @property
    def info(self):
        return self._declarations("INFO")

    @property
    def format(self):
        return self._declarations("FORMAT")

    @property
    def samples(self):
        for line in self.lines:
            if line.startswith("#CHROM"):
                return tuple(line.split("\t")[9:])
        return ()

    def replace_line(self, line, new_lines):
        """
        New header with line substituted by new_lines
        """
        i = self.lines.index(line)
        return VcfHeader(self.lines[:i] + tuple(new_lines) + self.lines[i + 1:])

    def __str__(self):
        return "\n".join(self.lines)


def format_qual(qual):
    if qual is None:
        return MISSING
    if qual.is_integer():
        return f"{int(qual)}"
    return repr(qual)


def _read_info(token):
    info = {}
    if token == MISSING:
        return info
    for item in token.split(";"):
        if not item:
            continue
        key, sep, value = item.partition("=")
        if key in info:
            raise ParseError(f"duplicate INFO key {key}", item)
        info[key] = tuple(value.split(",")) if sep else ()
    return info


def _format_info(info):
    if not info:
        return MISSING
    return ";".join(f"{k}={','.join(v)}" if v else k for k, v in info.items())


def _split_or_empty(token, sep):
    return () if token == MISSING else tuple(token.split(sep))


def _join_or_missing(values, sep):
    return sep.join(values) if values else MISSING


@dataclass(frozen=True)
class VcfRecord:
    """
    Variant record; info maps keys to value tuples, flags map to ()
    genotypes holds one mapping per sample column, keyed by FORMAT key;
    info and genotypes are read-only
    """
    chrom: str
    pos: int
    ids: Tuple[str, ...]
    ref: str
    alt: Tuple[str, ...]
    qual: Optional[float]
    filters: Tuple[str, ...]
    info: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    format: Optional[Tuple[str, ...]] = None
    genotypes: Tuple[Dict[str, str], ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "info", MappingProxyType(dict(self.info)))
        object.__setattr__(self, "genotypes", tuple(MappingProxyType(dict(gt))
            for gt in self.genotypes))

    @classmethod
    def from_line(cls, line):
        if line.startswith("#"):
            raise ParseError("comment/header line cannot be parsed as a "
                "variant", line)
        S = line.split("\t")
        if len(S) < 8:
            raise ParseError(f"expected at least 8 columns, found {len(S)}")
        try:
            pos = int(S[1])
        except ValueError as e:
            raise ParseError("POS must be an integer", S[1]) from e
        try:
            qual = None if S[5] == MISSING else float(S[5])
        except ValueError as e:
            raise ParseError("QUAL must be a number", S[5]) from e
        fmt = None
        genotypes = ()
        if len(S) > 8:
            fmt = tuple(S[8].split(":"))
            gts = []
            for col in S[9:]:
                values = col.split(":")
                if len(values) > len(fmt):
                    raise ParseError("more genotype fields than FORMAT keys",
                        col)
                gts.append(dict(zip(fmt, values)))
            genotypes = tuple(gts)
        return cls(S[0], pos, _split_or_empty(S[2], ";"), S[3],
            _split_or_empty(S[4], ","), qual, _split_or_empty(S[6], ";"),
            _read_info(S[7]), fmt, genotypes)

    @property
    def interval(self):
        """
        0-based half-open interval covered by the reference allele
        """
        start = self.pos - 1
        return self.chrom, start, start + len(self.ref)

    def has_info(self, key):
        return key in self.info

    def info_value(self, key, default=None):
        """
        First value of an INFO field, True for flags
        """
        if key not in self.info:
            return default
        values = self.info[key]
        return values[0] if values else True

    def __str__(self):
        line = (f"{self.chrom}\t{self.pos}\t{_join_or_missing(self.ids, ';')}\t"
            f"{self.ref}\t{_join_or_missing(self.alt, ',')}\t"
            f"{format_qual(self.qual)}\t"
            f"{_join_or_missing(self.filters, ';')}\t{_format_info(self.info)}")
        if self.format is not None:
            line += "\t" + ":".join(self.format)
            for gt in self.genotypes:
                line += "\t" + ":".join(gt[k] for k in self.format if k in gt)
        return line
