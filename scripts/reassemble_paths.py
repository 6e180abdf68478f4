#!/usr/bin/env python3

import argparse

from DshHelper import Cli
from DshHelper.Paths import ReassemblePaths


parser = argparse.ArgumentParser(
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    parents=[Cli.common_parser()],
    description='reassemble GFA 1.0 paths from their traversal records')


def main(argv=None):
    args = Cli.parse_args(parser, argv)
    ReassemblePaths(input_path=args.input, output_path=args.output,
        invalid_records=args.invalid_records).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(Cli.run(main))
