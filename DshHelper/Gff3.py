"""
GFF3 feature records

Nine tab separated columns: seqid, source, type, start, end, score,
strand, phase, attributes. Start is 1-based in the file and kept
0-based here, so start, end form a half-open interval.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Optional, Tuple

from DshHelper.Constants import MISSING
from DshHelper.Errors import ParseError

STRANDS = ("+", "-", "?")
PHASES = (0, 1, 2)


def _int(token, name):
    try:
        return int(token)
    except ValueError as e:
        raise ParseError(f"{name} must be an integer", token) from e


def _read_attributes(token):
    attributes = {}
    if token == MISSING:
        return attributes
    for item in token.split(";"):
        if not item:
            continue
        key, sep, value = item.partition("=")
        if not sep:
            raise ParseError("attribute must be key=value", item)
        if key in attributes:
            raise ParseError(f"duplicate attribute {key}", item)
        attributes[key] = tuple(value.split(","))
    return attributes


def _format_attributes(attributes):
    if not attributes:
        return MISSING
    return ";".join(f"{k}={','.join(v)}" for k, v in attributes.items())


@dataclass(frozen=True)
class Gff3Record:
    seqid: str
    source: str
    type: str
    start: int
    end: int
    score: Optional[float] = None
    strand: Optional[str] = None
    phase: Optional[int] = None
    attributes: Dict[str, Tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "attributes",
            MappingProxyType(dict(self.attributes)))

    @classmethod
    def from_line(cls, line):
        S = line.split("\t")
        if len(S) != 9:
            raise ParseError(f"expected 9 columns, found {len(S)}")
        start = _int(S[3], "start") - 1
        end = _int(S[4], "end")
        if start < 0 or end < start:
            raise ParseError(f"invalid coordinates {S[3]}-{S[4]}", S[3])
        score = None
        if S[5] != MISSING:
            try:
                score = float(S[5])
            except ValueError as e:
                raise ParseError("score must be a number", S[5]) from e
        strand = None
        if S[6] != MISSING:
            if S[6] not in STRANDS:
                raise ParseError("strand must be +, -, ? or .", S[6])
            strand = S[6]
        phase = None
        if S[7] != MISSING:
            phase = _int(S[7], "phase")
            if phase not in PHASES:
                raise ParseError("phase must be 0, 1, 2 or .", S[7])
        return cls(S[0], S[1], S[2], start, end, score, strand, phase,
            _read_attributes(S[8]))

    @property
    def interval(self):
        return self.seqid, self.start, self.end

    def attribute(self, key, default=None):
        """
        First value of an attribute
        """
        if key not in self.attributes:
            return default
        return self.attributes[key][0]

    def __str__(self):
        score = MISSING
        if self.score is not None:
            score = (f"{int(self.score)}" if self.score.is_integer()
                else repr(self.score))
        strand = MISSING if self.strand is None else self.strand
        phase = MISSING if self.phase is None else f"{self.phase}"
        return (f"{self.seqid}\t{self.source}\t{self.type}\t{self.start + 1}\t"
            f"{self.end}\t{score}\t{strand}\t{phase}\t"
            f"{_format_attributes(self.attributes)}")
