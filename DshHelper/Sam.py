"""
SAM header and alignment records, parsed and formatted by pysam
"""
import array
from types import MappingProxyType

import pysam

from DshHelper.Constants import ABSENT
from DshHelper.Errors import ParseError

MANDATORY_FIELDS = 11
SAME_REFERENCE = "="


class SamHeader:
    """
    @HD, @SQ, @RG, @PG and @CO lines without line terminators; the lines
    are written back as read
    """
    def __init__(self, lines=()):
        self.lines = tuple(lines)
        text = "".join(f"{line}\n" for line in self.lines)
        try:
            self.header = pysam.AlignmentHeader.from_text(text)
        except ValueError as e:
            raise ParseError(f"invalid SAM header: {e}") from e
        self.reference_names = frozenset(self.header.references)

    @classmethod
    def from_lines(cls, lines):
        return cls(lines)

    @property
    def references(self):
        """
        (name, length) of @SQ lines
        """
        return tuple((r, self.header.get_reference_length(r))
            for r in self.header.references)

    def has_reference(self, name):
        return name in self.reference_names

    def __str__(self):
        return "\n".join(self.lines)


def _tag_value(value):
    # B arrays come back as array.array
    if isinstance(value, array.array):
        return tuple(value)
    return value


class SamRecord:
    """
    Alignment backed by a pysam AlignedSegment; pos and pnext are 1-based
    and None when written as 0, absent strings are None
    """
    def __init__(self, segment):
        self._segment = segment

    @classmethod
    def from_line(cls, line, header):
        S = line.split("\t")
        if len(S) < MANDATORY_FIELDS:
            raise ParseError(f"expected at least {MANDATORY_FIELDS} fields, "
                f"found {len(S)}")
        # htslib turns alignments to unknown references into unmapped ones
        for name in (S[2], S[6]):
            if name not in (ABSENT, SAME_REFERENCE) and \
            not header.has_reference(name):
                raise ParseError(f"reference {name} is not declared in the "
                    "header", name)
        try:
            segment = pysam.AlignedSegment.fromstring(line, header.header)
        except ValueError as e:
            raise ParseError(f"{e}") from e
        return cls(segment)

    @property
    def qname(self):
        name = self._segment.query_name
        return None if name == ABSENT else name

    @property
    def flag(self):
        return self._segment.flag

    @property
    def rname(self):
        return self._segment.reference_name

    @property
    def pos(self):
        start = self._segment.reference_start
        return None if start < 0 else start + 1

    @property
    def mapq(self):
        return self._segment.mapping_quality

    @property
    def cigar(self):
        return self._segment.cigarstring

    @property
    def rnext(self):
        return self._segment.next_reference_name

    @property
    def pnext(self):
        start = self._segment.next_reference_start
        return None if start < 0 else start + 1

    @property
    def tlen(self):
        return self._segment.template_length

    @property
    def seq(self):
        return self._segment.query_sequence

    @property
    def qual(self):
        qualities = self._segment.query_qualities
        if qualities is None:
            return None
        return pysam.qualities_to_qualitystring(qualities)

    @property
    def tags(self):
        return MappingProxyType({name: _tag_value(value)
            for name, value in self._segment.get_tags()})

    def has_tag(self, name):
        return self._segment.has_tag(name)

    def tag(self, name, default=None):
        """
        Value of a tag, or default when absent
        """
        if not self._segment.has_tag(name):
            return default
        return _tag_value(self._segment.get_tag(name))

    @property
    def is_unmapped(self):
        return self._segment.is_unmapped

    @property
    def is_reverse(self):
        return self._segment.is_reverse

    @property
    def interval(self):
        """
        Mapping position as a 0-based single point interval
        """
        if self.rname is None or self.pos is None:
            return None
        return self.rname, self.pos - 1, self.pos

    def __eq__(self, other):
        if not isinstance(other, SamRecord):
            return NotImplemented
        return str(self) == str(other)

    __hash__ = None

    def __repr__(self):
        return f"SamRecord({str(self)!r})"

    def __str__(self):
        return self._segment.to_string()
