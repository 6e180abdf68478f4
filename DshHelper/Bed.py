"""
BED3, BED4, BED5, BED6 and BED12 records
Coordinates are 0-based half-open
"""
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from DshHelper.Constants import MISSING
from DshHelper.Errors import ParseError

BED_FORMATS = (3, 4, 5, 6, 12)
STRANDS = ("+", "-")


def _int(token, name):
    try:
        return int(token)
    except ValueError as e:
        raise ParseError(f"{name} must be an integer", token) from e


def _number(token):
    try:
        return int(token)
    except ValueError:
        pass
    try:
        return float(token)
    except ValueError as e:
        raise ParseError("score must be a number", token) from e


def _int_list(token, name):
    return tuple(_int(t, name) for t in token.rstrip(",").split(",") if t)


@dataclass(frozen=True)
class BedRecord:
    chrom: str
    start: int
    end: int
    name: Optional[str] = None
    score: Optional[Union[int, float]] = None
    strand: Optional[str] = None
    thick_start: Optional[int] = None
    thick_end: Optional[int] = None
    item_rgb: Optional[str] = None
    block_count: Optional[int] = None
    block_sizes: Optional[Tuple[int, ...]] = None
    block_starts: Optional[Tuple[int, ...]] = None
    columns: int = 3

    @classmethod
    def from_line(cls, line):
        S = line.split("\t")
        n = len(S)
        if n not in BED_FORMATS:
            raise ParseError("value is not in BED3, BED4, BED5, BED6 or "
                f"BED12 format, found {n} columns")
        start = _int(S[1], "start")
        end = _int(S[2], "end")
        if end < start:
            raise ParseError(f"end {end} is before start {start}", S[2])
        kw = dict(columns=n)
        if n >= 4:
            kw["name"] = S[3]
        if n >= 5:
            kw["score"] = _number(S[4])
        if n >= 6:
            if S[5] not in STRANDS + (MISSING,):
                raise ParseError("strand must be +, - or .", S[5])
            kw["strand"] = None if S[5] == MISSING else S[5]
        if n == 12:
            kw["thick_start"] = _int(S[6], "thickStart")
            kw["thick_end"] = _int(S[7], "thickEnd")
            kw["item_rgb"] = S[8]
            kw["block_count"] = _int(S[9], "blockCount")
            kw["block_sizes"] = _int_list(S[10], "blockSizes")
            kw["block_starts"] = _int_list(S[11], "blockStarts")
            if (len(kw["block_sizes"]) != kw["block_count"] or
            len(kw["block_starts"]) != kw["block_count"]):
                raise ParseError("blockSizes and blockStarts must have "
                    "blockCount values", S[9])
        return cls(S[0], start, end, **kw)

    @property
    def interval(self):
        return self.chrom, self.start, self.end

    @property
    def length(self):
        return self.end - self.start

    def __str__(self):
        S = [self.chrom, f"{self.start}", f"{self.end}"]
        if self.columns >= 4:
            S.append(self.name)
        if self.columns >= 5:
            S.append(f"{self.score}")
        if self.columns >= 6:
            S.append(MISSING if self.strand is None else self.strand)
        if self.columns == 12:
            S += [f"{self.thick_start}", f"{self.thick_end}", self.item_rgb,
                f"{self.block_count}",
                ",".join(f"{v}" for v in self.block_sizes),
                ",".join(f"{v}" for v in self.block_starts)]
        return "\t".join(S)
