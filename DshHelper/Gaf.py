"""
GAF (graph alignment format) records

Columns: query name, query length, query start, query end, strand,
  path, path length, path start, path end, residue matches,
  alignment block length, mapping quality, then tags
Coordinates are 0-based half-open
"""
from dataclasses import dataclass, field
from typing import Dict

from DshHelper.Errors import ParseError
from DshHelper.Tags import Tag, Tagged, read_tags, format_tags

MANDATORY_FIELDS = 12
STRANDS = ("+", "-")


def _int(token, name):
    try:
        return int(token)
    except ValueError as e:
        raise ParseError(f"{name} must be an integer", token) from e


@dataclass(frozen=True)
class GafRecord(Tagged):
    query_name: str
    query_length: int
    query_start: int
    query_end: int
    strand: str
    path_name: str
    path_length: int
    path_start: int
    path_end: int
    matches: int
    alignment_length: int
    mapping_quality: int
    tags: Dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def from_line(cls, line):
        S = line.split("\t")
        if len(S) < MANDATORY_FIELDS:
            raise ParseError(f"expected at least {MANDATORY_FIELDS} fields, "
                f"found {len(S)}")
        if S[4] not in STRANDS:
            raise ParseError("strand must be + or -", S[4])
        return cls(S[0], _int(S[1], "query length"),
            _int(S[2], "query start"), _int(S[3], "query end"), S[4], S[5],
            _int(S[6], "path length"), _int(S[7], "path start"),
            _int(S[8], "path end"), _int(S[9], "residue matches"),
            _int(S[10], "alignment block length"),
            _int(S[11], "mapping quality"), read_tags(S[MANDATORY_FIELDS:]))

    @property
    def interval(self):
        """
        Query name and aligned query interval
        """
        return self.query_name, self.query_start, self.query_end

    def __str__(self):
        return (f"{self.query_name}\t{self.query_length}\t{self.query_start}\t"
            f"{self.query_end}\t{self.strand}\t{self.path_name}\t"
            f"{self.path_length}\t{self.path_start}\t{self.path_end}\t"
            f"{self.matches}\t{self.alignment_length}\t"
            f"{self.mapping_quality}{format_tags(self.tags)}")
