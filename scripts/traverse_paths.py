#!/usr/bin/env python3

import argparse

from DshHelper import Cli
from DshHelper.Paths import TraversePaths


parser = argparse.ArgumentParser(
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    parents=[Cli.common_parser()],
    description='write traversal records for the segments of GFA 1.0 paths')


def main(argv=None):
    args = Cli.parse_args(parser, argv)
    TraversePaths(input_path=args.input, output_path=args.output,
        invalid_records=args.invalid_records).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(Cli.run(main))
