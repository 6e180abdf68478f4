#!/usr/bin/env python3

import argparse
import operator

from DshHelper import Cli
from DshHelper.Filters import ThresholdFilter, ScriptFilter
from DshHelper.Formats import FastqFormat
from DshHelper.Pipeline import Pipeline


parser = argparse.ArgumentParser(
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    parents=[Cli.common_parser()],
    description='filter reads in FASTQ format')
parser.add_argument('-n', '--length', type=int,
    help='keep reads longer than this')
Cli.add_script_argument(parser)


def main(argv=None):
    args = Cli.parse_args(parser, argv)
    filters = []
    if args.length is not None:
        filters.append(ThresholdFilter(len, args.length, operator.gt))
    if args.script is not None:
        filters.append(ScriptFilter(args.script))
    Pipeline(FastqFormat(), filters, args.input, args.output,
        args.invalid_records).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(Cli.run(main))
