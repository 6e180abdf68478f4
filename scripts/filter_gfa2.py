#!/usr/bin/env python3

import argparse
import operator

from DshHelper import Cli
from DshHelper.Filters import ThresholdFilter, ScriptFilter, attribute
from DshHelper.Formats import Gfa2Format
from DshHelper.Gfa2 import Segment
from DshHelper.Pipeline import Pipeline


parser = argparse.ArgumentParser(
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    parents=[Cli.common_parser()],
    description='filter records in GFA 2.0 format')
parser.add_argument('-n', '--length', type=int,
    help='minimum segment length, other records pass')
Cli.add_script_argument(parser)


def main(argv=None):
    args = Cli.parse_args(parser, argv)
    filters = []
    if args.length is not None:
        filters.append(ThresholdFilter(attribute("length"), args.length,
            operator.ge, Segment))
    if args.script is not None:
        filters.append(ScriptFilter(args.script))
    Pipeline(Gfa2Format(), filters, args.input, args.output,
        args.invalid_records).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(Cli.run(main))
