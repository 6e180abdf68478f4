"""
GFA 1.0 path and traversal rewrites, conversion to GFA 2.0
"""
from collections import defaultdict
import logging
from operator import attrgetter

from DshHelper import Gfa1, Gfa2
from DshHelper.Errors import ParseError
from DshHelper.Formats import Gfa1Format, Gfa2Format
from DshHelper.Pipeline import Pipeline
from DshHelper.Tags import Tag

logger = logging.getLogger(__name__)


def traversals(path):
    """
    One traversal per consecutive pair of path segments, ordinals from 0
    """
    for i in range(len(path.segments) - 1):
        overlap = None
        if path.overlaps is not None and i < len(path.overlaps):
            overlap = path.overlaps[i]
        yield Gfa1.Traversal(path.name, i, path.segments[i],
            path.segments[i + 1], overlap)


def reassemble(path, path_traversals):
    """
    Path rebuilt from its traversals in ordinal order
    """
    if not path_traversals:
        return path
    ordered = sorted(path_traversals, key=attrgetter("ordinal"))
    segments = [ordered[0].source] + [t.target for t in ordered]
    overlaps = [t.overlap for t in ordered if t.overlap is not None]
    return Gfa1.Path(path.name, tuple(segments),
        tuple(overlaps) if overlaps else None, path.tags)


class TraversePaths(Pipeline):
    """
    Write every record and, after each path, its traversals
    """
    def __init__(self, **kwargs):
        super().__init__(Gfa1Format(), **kwargs)

    def rewrite(self, record):
        yield record
        if isinstance(record, Gfa1.Path):
            yield from traversals(record)


class ReassemblePaths(Pipeline):
    """
    Rebuild paths from traversal records; paths are written after all
    other records, in input order
    """
    def __init__(self, **kwargs):
        super().__init__(Gfa1Format(), **kwargs)
        self.paths = []
        self.traversals = defaultdict(list)

    def rewrite(self, record):
        if isinstance(record, Gfa1.Path):
            self.paths.append(record)
            return ()
        if isinstance(record, Gfa1.Traversal):
            self.traversals[record.path_name].append(record)
            return ()
        return (record,)

    def finish(self):
        names = {p.name for p in self.paths}
        orphans = [n for n in self.traversals if n not in names]
        if orphans:
            logger.warning(f"dropping traversals of unknown paths: {orphans}")
        for path in self.paths:
            yield reassemble(path, self.traversals.get(path.name, ()))


UNKNOWN_POSITION = Gfa2.Position(0)


def to_gfa2(record):
    """
    GFA 2.0 equivalent of a GFA 1.0 record, None when there is none
    """
    if isinstance(record, Gfa1.Header):
        tags = dict(record.tags)
        if "VN" in tags:
            if tags["VN"].value != "1.0":
                raise ParseError("cannot convert input as GFA 1.0, was "
                    f"{tags['VN'].value}", f"{tags['VN']}")
            tags = {"VN": Tag("VN", "Z", "2.0")}
            tags.update((k, v) for k, v in record.tags.items() if k != "VN")
        return Gfa2.Header(tags)
    if isinstance(record, Gfa1.Segment):
        if record.sequence is not None:
            length = len(record.sequence)
        elif record.numeric_tag("LN") is not None:
            length = int(record.numeric_tag("LN"))
        else:
            length = 0
        return Gfa2.Segment(record.id, length, record.sequence, record.tags)
    if isinstance(record, Gfa1.Link):
        return Gfa2.Edge(None, record.source, record.target, UNKNOWN_POSITION,
            UNKNOWN_POSITION, UNKNOWN_POSITION, UNKNOWN_POSITION,
            record.overlap, record.tags)
    if isinstance(record, Gfa1.Containment):
        return Gfa2.Edge(None, record.container, record.contained,
            UNKNOWN_POSITION, UNKNOWN_POSITION,
            Gfa2.Position(record.position), UNKNOWN_POSITION,
            record.overlap, record.tags)
    if isinstance(record, Gfa1.Path):
        return Gfa2.Path(record.name, record.segments, record.tags)
    return None


class Gfa1ToGfa2(Pipeline):
    """
    Traversals and unrecognized lines have no GFA 2.0 counterpart and
    are dropped
    """
    keep_comments = False

    def __init__(self, **kwargs):
        super().__init__(Gfa1Format(), output_format=Gfa2Format(), **kwargs)

    def rewrite(self, record):
        converted = to_gfa2(record)
        if converted is None:
            return ()
        return (converted,)
