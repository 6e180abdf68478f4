#!/usr/bin/env python3

import argparse
import operator

from DshHelper import Cli
from DshHelper.Constants import FASTA_LINE_WIDTH
from DshHelper.Filters import ThresholdFilter, ScriptFilter
from DshHelper.Formats import FastaFormat
from DshHelper.Pipeline import Pipeline


parser = argparse.ArgumentParser(
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    parents=[Cli.common_parser()],
    description='filter sequences in FASTA format; records are Biopython '
    'SeqRecords in scripts, e.g. "r.id.startswith(\'chr\')"')
parser.add_argument('-n', '--length', type=int,
    help='keep sequences longer than this')
parser.add_argument('-w', '--line-width', type=int, default=FASTA_LINE_WIDTH,
    help='output line width, 0 writes each sequence on one line')
Cli.add_script_argument(parser)


def main(argv=None):
    args = Cli.parse_args(parser, argv)
    if args.line_width < 0:
        parser.error("--line-width must not be negative")
    filters = []
    if args.length is not None:
        filters.append(ThresholdFilter(len, args.length, operator.gt))
    if args.script is not None:
        filters.append(ScriptFilter(args.script))
    Pipeline(FastaFormat(args.line_width), filters, args.input, args.output,
        args.invalid_records).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(Cli.run(main))
