#!/usr/bin/env python3

import argparse

from DshHelper import Cli
from DshHelper.Remap import RemapDbSnp


parser = argparse.ArgumentParser(
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    parents=[Cli.common_parser()],
    description='remap INFO DB declared as String to a flag plus a dbsnp INFO field')


def main(argv=None):
    args = Cli.parse_args(parser, argv)
    RemapDbSnp(input_path=args.input, output_path=args.output,
        invalid_records=args.invalid_records).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(Cli.run(main))
