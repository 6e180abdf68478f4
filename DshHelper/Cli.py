"""
Command line plumbing shared by the scripts: common options, logging
setup and mapping of errors to exit codes
"""
import argparse
import logging
import os
import sys

from DshHelper.Constants import (VERSION, LOG_FORMAT, EXIT_OK, EXIT_FAILURE,
    INVALID_RECORDS_FAIL, INVALID_RECORDS_POLICIES)
from DshHelper.Errors import ArgumentError, DshError
from DshHelper.Expression import Expression
from DshHelper.Filters import Range
from DshHelper.IO import STDIO

logger = logging.getLogger(__name__)

VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def common_parser():
    """
    Parent parser with the options every tool accepts
    """
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument('-i', '--input', default=STDIO,
        help='input file, "-" for standard input; .gz, .bgz and .bz2 files '
        'are decompressed')
    parser.add_argument('-o', '--output', default=STDIO,
        help='output file, "-" for standard output; .gz and .bgz files are '
        'written as BGZF, .bz2 with bzip2')
    parser.add_argument('-a', '--about', action='version',
        version=f'%(prog)s (DshTools) {VERSION}',
        help='display about message and exit')
    parser.add_argument('-v', '--verbose', action='count', default=0,
        help='log progress (-v) or debugging details (-vv) to standard error')
    parser.add_argument('--invalid-records', choices=INVALID_RECORDS_POLICIES,
        default=INVALID_RECORDS_FAIL,
        help='abort on a malformed record or skip it with a warning')
    return parser


def range_type(value):
    try:
        return Range.from_string(value)
    except ArgumentError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def script_type(value):
    try:
        return Expression(value)
    except ArgumentError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def id_list_type(value):
    return [v for v in value.split(",") if v]


def add_script_argument(parser):
    parser.add_argument('-e', '--script', type=script_type,
        help='filter by expression over the record r, '
        'e.g. "r.mapq >= 30 and r.rname == \'chr1\'"')


def setup_logging(verbosity=0, stream=None):
    """
    Log to standard error so that records on standard output stay clean
    """
    level = VERBOSITY_LEVELS[min(verbosity, len(VERBOSITY_LEVELS) - 1)]
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    handler = logging.StreamHandler(sys.stderr if stream is None else stream)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    return root


def parse_args(parser, argv=None):
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    return args


def run(main, argv=None):
    """
    Call main(argv) and turn failures into an exit code
    """
    try:
        return main(argv)
    except BrokenPipeError:
        # downstream consumer went away; silence the flush at exit
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return EXIT_OK
    except (DshError, OSError) as e:
        logger.error(f"{e}")
        return EXIT_FAILURE
    except UnicodeError as e:
        logger.error(f"could not decode or encode text: {e}")
        return EXIT_FAILURE
