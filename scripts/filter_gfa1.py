#!/usr/bin/env python3

import argparse
import operator

from DshHelper import Cli
from DshHelper.Filters import (ThresholdFilter, ScriptFilter,
    SegmentReferenceFilter, attribute)
from DshHelper.Formats import Gfa1Format
from DshHelper.Gfa1 import Segment, Link
from DshHelper.Pipeline import Pipeline


parser = argparse.ArgumentParser(
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    parents=[Cli.common_parser()],
    description='filter records in GFA 1.0 format; thresholds apply to the '
    'record types carrying the value, other records pass')
parser.add_argument('-g', '--invalid-segment-references', action='store_true',
    help='drop records referring to segments not defined before them')
parser.add_argument('-n', '--length', type=int,
    help='minimum segment length (LN tag, else sequence length)')
parser.add_argument('-f', '--fragment-count', type=int,
    help='minimum segment and link fragment count (FC tag)')
parser.add_argument('-k', '--kmer-count', type=int,
    help='minimum segment and link k-mer count (KC tag)')
parser.add_argument('-r', '--read-count', type=int,
    help='minimum segment and link read count (RC tag)')
parser.add_argument('-m', '--mapping-quality', type=int,
    help='minimum link mapping quality (MQ tag)')
parser.add_argument('-s', '--mismatch-count', type=int,
    help='link mismatch count (NM tag) must be below this value')
Cli.add_script_argument(parser)


def main(argv=None):
    args = Cli.parse_args(parser, argv)
    filters = []
    if args.invalid_segment_references:
        filters.append(SegmentReferenceFilter())
    if args.length is not None:
        filters.append(ThresholdFilter(attribute("length"), args.length,
            operator.ge, Segment))
    for name, threshold in (("fragment_count", args.fragment_count),
    ("kmer_count", args.kmer_count), ("read_count", args.read_count)):
        if threshold is not None:
            filters.append(ThresholdFilter(attribute(name), threshold,
                operator.ge, (Segment, Link)))
    if args.mapping_quality is not None:
        filters.append(ThresholdFilter(attribute("mapping_quality"),
            args.mapping_quality, operator.ge, Link))
    if args.mismatch_count is not None:
        filters.append(ThresholdFilter(attribute("mismatch_count"),
            args.mismatch_count, operator.lt, Link))
    if args.script is not None:
        filters.append(ScriptFilter(args.script))
    Pipeline(Gfa1Format(), filters, args.input, args.output,
        args.invalid_records).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(Cli.run(main))
