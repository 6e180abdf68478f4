#!/usr/bin/env python3

import argparse
import operator

from DshHelper import Cli
from DshHelper.Filters import (RangeFilter, ThresholdFilter, ScriptFilter,
    attribute)
from DshHelper.Formats import Gff3Format
from DshHelper.Pipeline import Pipeline


parser = argparse.ArgumentParser(
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    parents=[Cli.common_parser()],
    description='filter features in GFF3 format')
parser.add_argument('-r', '--range', type=Cli.range_type,
    help='keep features overlapping chrom:start-end, 0-based half-open')
parser.add_argument('-s', '--score', type=float,
    help='keep features with score greater than this value')
Cli.add_script_argument(parser)


def main(argv=None):
    args = Cli.parse_args(parser, argv)
    filters = []
    if args.range is not None:
        filters.append(RangeFilter(args.range))
    if args.score is not None:
        filters.append(ThresholdFilter(attribute("score"), args.score,
            operator.gt))
    if args.script is not None:
        filters.append(ScriptFilter(args.script))
    Pipeline(Gff3Format(), filters, args.input, args.output,
        args.invalid_records).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(Cli.run(main))
