#!/usr/bin/env python3

import argparse

from DshHelper import Cli
from DshHelper.Paths import Gfa1ToGfa2


parser = argparse.ArgumentParser(
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    parents=[Cli.common_parser()],
    description='convert GFA 1.0 to GFA 2.0')


def main(argv=None):
    args = Cli.parse_args(parser, argv)
    Gfa1ToGfa2(input_path=args.input, output_path=args.output,
        invalid_records=args.invalid_records).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(Cli.run(main))
