#!/usr/bin/env python3

import argparse

from DshHelper import Cli
from DshHelper.Remap import RemapPhaseSet


parser = argparse.ArgumentParser(
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    parents=[Cli.common_parser()],
    description='remap FORMAT PS phase set names declared as String to integers')


def main(argv=None):
    args = Cli.parse_args(parser, argv)
    RemapPhaseSet(input_path=args.input, output_path=args.output,
        invalid_records=args.invalid_records).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(Cli.run(main))
