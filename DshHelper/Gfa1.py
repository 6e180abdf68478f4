"""
GFA 1.0 records

Lines are tab separated, the first column is the record type:
  H  header
  S  segment
  L  link
  C  containment
  P  path
  T  traversal
Optional fields are NAME:TYPE:VALUE tags after the mandatory columns.
Missing sequences and overlaps are written as *.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from DshHelper.Constants import ABSENT
from DshHelper.Errors import ParseError
from DshHelper.Tags import Tag, Tagged, read_tags, format_tags

ORIENTATIONS = ("+", "-")


@dataclass(frozen=True)
class Reference:
    """
    Segment identifier with orientation
    """
    id: str
    orientation: str

    def __post_init__(self):
        if self.orientation not in ORIENTATIONS:
            raise ParseError(f"invalid orientation {self.orientation}",
                self.orientation)

    @classmethod
    def from_columns(cls, seg_id, orientation):
        return cls(seg_id, orientation)

    @classmethod
    def from_token(cls, token):
        """
        Reference written as id+ or id-
        """
        if len(token) < 2:
            raise ParseError("invalid reference", token)
        return cls(token[:-1], token[-1])

    @property
    def is_forward(self):
        return self.orientation == "+"

    def __str__(self):
        return f"{self.id}{self.orientation}"


def _optional(token):
    return None if token == ABSENT else token


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
        S = line.split("\t")
        return cls(read_tags(S[1:]))

    def __str__(self):
        return f"H{format_tags(self.tags)}"


@dataclass(frozen=True)
class Segment(Tagged):
    id: str
    sequence: Optional[str] = None
    tags: Dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def from_line(cls, line):
        S = line.split("\t")
        _check_columns(S, 3, "segment")
        return cls(S[1], _optional(S[2]), read_tags(S[3:]))

    @property
    def length(self):
        """
        Numeric LN tag if present, else the length of the sequence
        """
        ln = self.numeric_tag("LN")
        if ln is not None:
            return ln
        if self.sequence is not None:
            return len(self.sequence)
        return None

    @property
    def read_count(self):
        return self.numeric_tag("RC")

    @property
    def fragment_count(self):
        return self.numeric_tag("FC")

    @property
    def kmer_count(self):
        return self.numeric_tag("KC")

    def __str__(self):
        seq = ABSENT if self.sequence is None else self.sequence
        return f"S\t{self.id}\t{seq}{format_tags(self.tags)}"


@dataclass(frozen=True)
class Link(Tagged):
    source: Reference
    target: Reference
    overlap: Optional[str] = None
    tags: Dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def from_line(cls, line):
        S = line.split("\t")
        _check_columns(S, 6, "link")
        return cls(Reference.from_columns(S[1], S[2]),
            Reference.from_columns(S[3], S[4]), _optional(S[5]),
            read_tags(S[6:]))

    @property
    def read_count(self):
        return self.numeric_tag("RC")

    @property
    def fragment_count(self):
        return self.numeric_tag("FC")

    @property
    def kmer_count(self):
        return self.numeric_tag("KC")

    @property
    def mapping_quality(self):
        return self.numeric_tag("MQ")

    @property
    def mismatch_count(self):
        return self.numeric_tag("NM")

    def __str__(self):
        overlap = ABSENT if self.overlap is None else self.overlap
        return (f"L\t{self.source.id}\t{self.source.orientation}\t"
            f"{self.target.id}\t{self.target.orientation}\t{overlap}"
            f"{format_tags(self.tags)}")


@dataclass(frozen=True)
class Containment(Tagged):
    container: Reference
    contained: Reference
    position: int
    overlap: Optional[str] = None
    tags: Dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def from_line(cls, line):
        S = line.split("\t")
        _check_columns(S, 7, "containment")
        return cls(Reference.from_columns(S[1], S[2]),
            Reference.from_columns(S[3], S[4]), _int(S[5]), _optional(S[6]),
            read_tags(S[7:]))

    def __str__(self):
        overlap = ABSENT if self.overlap is None else self.overlap
        return (f"C\t{self.container.id}\t{self.container.orientation}\t"
            f"{self.contained.id}\t{self.contained.orientation}\t"
            f"{self.position}\t{overlap}{format_tags(self.tags)}")


@dataclass(frozen=True)
class Path(Tagged):
    name: str
    segments: Tuple[Reference, ...]
    overlaps: Optional[Tuple[str, ...]] = None
    tags: Dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def from_line(cls, line):
        S = line.split("\t")
        _check_columns(S, 4, "path")
        segments = tuple(Reference.from_token(t) for t in S[2].split(","))
        overlaps = None if S[3] == ABSENT else tuple(S[3].split(","))
        return cls(S[1], segments, overlaps, read_tags(S[4:]))

    def __str__(self):
        segments = ",".join(str(s) for s in self.segments)
        overlaps = ABSENT if self.overlaps is None else ",".join(self.overlaps)
        return f"P\t{self.name}\t{segments}\t{overlaps}{format_tags(self.tags)}"


@dataclass(frozen=True)
class Traversal(Tagged):
    path_name: str
    ordinal: int
    source: Reference
    target: Reference
    overlap: Optional[str] = None
    tags: Dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def from_line(cls, line):
        S = line.split("\t")
        _check_columns(S, 7, "traversal")
        if len(S) == 7:
            # overlap column may be left out
            S.append(ABSENT)
        return cls(S[1], _int(S[2]), Reference.from_columns(S[3], S[4]),
            Reference.from_columns(S[5], S[6]), _optional(S[7]),
            read_tags(S[8:]))

    def __str__(self):
        overlap = ABSENT if self.overlap is None else self.overlap
        return (f"T\t{self.path_name}\t{self.ordinal}\t{self.source.id}\t"
            f"{self.source.orientation}\t{self.target.id}\t"
            f"{self.target.orientation}\t{overlap}{format_tags(self.tags)}")


RECORD_TYPES = {
    "H": Header,
    "S": Segment,
    "L": Link,
    "C": Containment,
    "P": Path,
    "T": Traversal,
}


def record_from_line(line):
    """
    Parse one GFA 1.0 line, None if the record type is not recognized
    """
    code = line.split("\t", maxsplit=1)[0]
    if code not in RECORD_TYPES:
        return None
    return RECORD_TYPES[code].from_line(line)


def segment_ids(record):
    """
    Identifiers of the segments a record refers to
    """
    if isinstance(record, Link):
        return (record.source.id, record.target.id)
    if isinstance(record, Containment):
        return (record.container.id, record.contained.id)
    if isinstance(record, Path):
        return tuple(s.id for s in record.segments)
    if isinstance(record, Traversal):
        return (record.source.id, record.target.id)
    return ()
