#!/usr/bin/env python3

import argparse
import operator

from DshHelper import Cli
from DshHelper.Filters import (RangeFilter, ThresholdFilter, IdFilter,
    ScriptFilter, attribute)
from DshHelper.Formats import VcfFormat
from DshHelper.Pipeline import Pipeline


parser = argparse.ArgumentParser(
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    parents=[Cli.common_parser()],
    description='filter variants in VCF format')
parser.add_argument('-r', '--range', type=Cli.range_type,
    help='keep variants overlapping chrom:start-end, 0-based half-open')
parser.add_argument('--qual', type=float,
    help='keep variants with QUAL at least this value')
parser.add_argument('-s', '--snp-ids', type=Cli.id_list_type,
    help='keep variants with any of these comma-separated ids')
Cli.add_script_argument(parser)


def main(argv=None):
    args = Cli.parse_args(parser, argv)
    filters = []
    if args.range is not None:
        filters.append(RangeFilter(args.range))
    if args.qual is not None:
        filters.append(ThresholdFilter(attribute("qual"), args.qual,
            operator.ge))
    if args.snp_ids:
        filters.append(IdFilter(args.snp_ids))
    if args.script is not None:
        filters.append(ScriptFilter(args.script))
    Pipeline(VcfFormat(), filters, args.input, args.output,
        args.invalid_records).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(Cli.run(main))
