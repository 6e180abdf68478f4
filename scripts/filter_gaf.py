#!/usr/bin/env python3

import argparse
import operator

from DshHelper import Cli
from DshHelper.Filters import (RangeFilter, ThresholdFilter, ScriptFilter,
    attribute)
from DshHelper.Formats import GafFormat
from DshHelper.Pipeline import Pipeline


parser = argparse.ArgumentParser(
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    parents=[Cli.common_parser()],
    description='filter graph alignments in GAF format')
parser.add_argument('-r', '--query', type=Cli.range_type,
    help='keep alignments overlapping query:start-end, 0-based half-open')
parser.add_argument('-q', '--mapping-quality', type=int,
    help='keep alignments with mapping quality at least this value')
Cli.add_script_argument(parser)


def main(argv=None):
    args = Cli.parse_args(parser, argv)
    filters = []
    if args.query is not None:
        filters.append(RangeFilter(args.query))
    if args.mapping_quality is not None:
        filters.append(ThresholdFilter(attribute("mapping_quality"),
            args.mapping_quality, operator.ge))
    if args.script is not None:
        filters.append(ScriptFilter(args.script))
    Pipeline(GafFormat(), filters, args.input, args.output,
        args.invalid_records).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(Cli.run(main))
