"""
GFA 2.0 records

  H  header
  S  segment   id length sequence
  F  fragment  segment external+- sbeg send fbeg fend alignment
  E  edge      id source+- target+- sbeg send tbeg tend alignment
  G  gap       id source+- target+- distance variance
  O  path      id ref+- ref+- ...
  U  set       id id id ...
Positions may carry a trailing $ marking the end of the sequence.
Alignments are CIGAR strings or comma-separated traces.
"""
from dataclasses import dataclass, field
import re
from typing import Dict, Optional, Tuple

from DshHelper.Constants import ABSENT
from DshHelper.Errors import ParseError
from DshHelper.Gfa1 import Reference
from DshHelper.Tags import Tag, Tagged, read_tags, format_tags

CIGAR_RE = re.compile(r"^([0-9]+[MDIP])+$")
TRACE_RE = re.compile(r"^-?[0-9]+(,-?[0-9]+)*$")


@dataclass(frozen=True)
class Position:
    value: int
    terminal: bool = False

    @classmethod
    def from_token(cls, token):
        terminal = token.endswith("$")
        digits = token[:-1] if terminal else token
        try:
            return cls(int(digits), terminal)
        except ValueError as e:
            raise ParseError("invalid position", token) from e

    def __str__(self):
        return f"{self.value}$" if self.terminal else f"{self.value}"


def read_alignment(token):
    """
    CIGAR or trace alignment, None for *
    """
    if token == ABSENT:
        return None
    if CIGAR_RE.match(token) or TRACE_RE.match(token):
        return token
    raise ParseError("invalid alignment", token)


def _optional_id(token):
    return None if token == ABSENT else token


def _opt(value):
    return ABSENT if value is None else value


def _int(token):
    try:
        return int(token)
    except ValueError as e:
        raise ParseError("expected an integer", token) from e


def _check_columns(S, n, record_type):
    if len(S) < n:
        raise ParseError(f"{record_type} line must have at least {n} "
            f"columns, found {len(S)}")


@dataclass(frozen=True)
class Header(Tagged):
    tags: Dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def from_line(cls, line):
        return cls(read_tags(line.split("\t")[1:]))

    def __str__(self):
        return f"H{format_tags(self.tags)}"


@dataclass(frozen=True)
class Segment(Tagged):
    id: str
    length: int
    sequence: Optional[str] = None
    tags: Dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def from_line(cls, line):
        S = line.split("\t")
        _check_columns(S, 4, "segment")
        seq = None if S[3] == ABSENT else S[3]
        return cls(S[1], _int(S[2]), seq, read_tags(S[4:]))

    def __str__(self):
        return (f"S\t{self.id}\t{self.length}\t{_opt(self.sequence)}"
            f"{format_tags(self.tags)}")


@dataclass(frozen=True)
class Fragment(Tagged):
    segment_id: str
    external: Reference
    segment_start: Position
    segment_end: Position
    fragment_start: Position
    fragment_end: Position
    alignment: Optional[str] = None
    tags: Dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def from_line(cls, line):
        S = line.split("\t")
        _check_columns(S, 8, "fragment")
        return cls(S[1], Reference.from_token(S[2]),
            *(Position.from_token(t) for t in S[3:7]),
            read_alignment(S[7]), read_tags(S[8:]))

    def __str__(self):
        return (f"F\t{self.segment_id}\t{self.external}\t"
            f"{self.segment_start}\t{self.segment_end}\t"
            f"{self.fragment_start}\t{self.fragment_end}\t"
            f"{_opt(self.alignment)}{format_tags(self.tags)}")


@dataclass(frozen=True)
class Edge(Tagged):
    id: Optional[str]
    source: Reference
    target: Reference
    source_start: Position
    source_end: Position
    target_start: Position
    target_end: Position
    alignment: Optional[str] = None
    tags: Dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def from_line(cls, line):
        S = line.split("\t")
        _check_columns(S, 9, "edge")
        return cls(_optional_id(S[1]), Reference.from_token(S[2]),
            Reference.from_token(S[3]),
            *(Position.from_token(t) for t in S[4:8]),
            read_alignment(S[8]), read_tags(S[9:]))

    def __str__(self):
        return (f"E\t{_opt(self.id)}\t{self.source}\t{self.target}\t"
            f"{self.source_start}\t{self.source_end}\t"
            f"{self.target_start}\t{self.target_end}\t"
            f"{_opt(self.alignment)}{format_tags(self.tags)}")


@dataclass(frozen=True)
class Gap(Tagged):
    id: Optional[str]
    source: Reference
    target: Reference
    distance: int
    variance: Optional[int] = None
    tags: Dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def from_line(cls, line):
        S = line.split("\t")
        _check_columns(S, 6, "gap")
        variance = None if S[5] == ABSENT else _int(S[5])
        return cls(_optional_id(S[1]), Reference.from_token(S[2]),
            Reference.from_token(S[3]), _int(S[4]), variance,
            read_tags(S[6:]))

    def __str__(self):
        return (f"G\t{_opt(self.id)}\t{self.source}\t{self.target}\t"
            f"{self.distance}\t{_opt(self.variance)}{format_tags(self.tags)}")


@dataclass(frozen=True)
class Path(Tagged):
    """
    Ordered group (O line)
    """
    id: Optional[str]
    references: Tuple[Reference, ...]
    tags: Dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def from_line(cls, line):
        S = line.split("\t")
        _check_columns(S, 3, "path")
        refs = tuple(Reference.from_token(t) for t in S[2].split(" "))
        return cls(_optional_id(S[1]), refs, read_tags(S[3:]))

    def __str__(self):
        refs = " ".join(str(r) for r in self.references)
        return f"O\t{_opt(self.id)}\t{refs}{format_tags(self.tags)}"


@dataclass(frozen=True)
class Set(Tagged):
    """
    Unordered group (U line)
    """
    id: Optional[str]
    ids: Tuple[str, ...]
    tags: Dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def from_line(cls, line):
        S = line.split("\t")
        _check_columns(S, 3, "set")
        return cls(_optional_id(S[1]), tuple(S[2].split(" ")),
            read_tags(S[3:]))

    def __str__(self):
        return (f"U\t{_opt(self.id)}\t{' '.join(self.ids)}"
            f"{format_tags(self.tags)}")


RECORD_TYPES = {
    "H": Header,
    "S": Segment,
    "F": Fragment,
    "E": Edge,
    "G": Gap,
    "O": Path,
    "U": Set,
}


def record_from_line(line):
    """
    Parse one GFA 2.0 line, None if the record type is not recognized
    """
    code = line.split("\t", maxsplit=1)[0]
    if code not in RECORD_TYPES:
        return None
    return RECORD_TYPES[code].from_line(line)
