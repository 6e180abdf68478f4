"""
Record predicates

Every filter is a callable taking a record and returning a bool.
Filters configured for one record kind let other kinds through.
"""
from dataclasses import dataclass
import logging
import operator

from DshHelper.Constants import RANGE_RE, RANGE_FORMAT_ERROR
from DshHelper.Errors import ArgumentError
from DshHelper.Expression import Expression
from DshHelper.Gfa1 import Segment, segment_ids

logger = logging.getLogger(__name__)


def intersects(a_start, a_end, b_start, b_end):
    """
    Half-open interval intersection, empty intervals never intersect
    """
    return a_start < b_end and b_start < a_end


@dataclass(frozen=True)
class Range:
    """
    chrom:start-end, 0-based half-open
    """
    chrom: str
    start: int
    end: int

    @classmethod
    def from_string(cls, value):
        m = RANGE_RE.match(value)
        if m is None:
            raise ArgumentError(RANGE_FORMAT_ERROR)
        chrom, start, end = m.group(1), int(m.group(2)), int(m.group(3))
        if not chrom or end < start:
            raise ArgumentError(RANGE_FORMAT_ERROR)
        return cls(chrom, start, end)

    def contains(self, chrom, pos):
        return chrom == self.chrom and self.start <= pos < self.end

    def overlaps(self, chrom, start, end):
        return chrom == self.chrom and intersects(self.start, self.end,
            start, end)

    def __str__(self):
        return f"{self.chrom}:{self.start}-{self.end}"


class RangeFilter:
    """
    Pass records whose interval (chrom, start, end) overlaps the range;
    records without a position fail
    """
    def __init__(self, rng, interval=operator.attrgetter("interval")):
        self.range = rng
        self.interval = interval

    def __call__(self, record):
        iv = self.interval(record)
        if iv is None:
            return False
        return self.range.overlaps(*iv)


class ThresholdFilter:
    """
    Compare a numeric value against a threshold; a missing value fails

    getter - record -> value or None
    compare - operator, e.g. operator.ge
    record_types - only records of these types are tested
    """
    def __init__(self, getter, threshold, compare=operator.ge,
    record_types=None):
        self.getter = getter
        self.threshold = threshold
        self.compare = compare
        self.record_types = record_types

    def __call__(self, record):
        if self.record_types is not None and not isinstance(record,
        self.record_types):
            return True
        value = self.getter(record)
        if value is None:
            return False
        return self.compare(value, self.threshold)


class IdFilter:
    """
    Pass records with any identifier in ids
    """
    def __init__(self, ids, getter=operator.attrgetter("ids")):
        self.ids = frozenset(ids)
        self.getter = getter

    def __call__(self, record):
        return any(i in self.ids for i in self.getter(record))


class ScriptFilter:
    def __init__(self, source):
        self.expression = source if isinstance(source, Expression) \
            else Expression(source)

    def __call__(self, record):
        return self.expression(record)


class SegmentReferenceFilter:
    """
    GFA 1.0: drop links, containments, paths and traversals referring to
    segments not seen earlier in the stream
    """
    def __init__(self):
        self.segment_ids = set()

    def __call__(self, record):
        if isinstance(record, Segment):
            self.segment_ids.add(record.id)
            return True
        missing = [i for i in segment_ids(record) if i not in self.segment_ids]
        if missing:
            logger.debug(f"invalid segment references {missing}: {record}")
            return False
        return True


def attribute(name):
    """
    Getter returning None when the record lacks the attribute
    """
    def getter(record):
        return getattr(record, name, None)
    return getter
