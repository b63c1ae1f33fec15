"""
wordloop CLI.
"""

import argparse
from wordloop.cli.commands import words, segment, review


def main():
    parser = argparse.ArgumentParser(prog="wordloop", description="wordloop CLI")
    subparsers = parser.add_subparsers(dest="command")

    words.add_subparser(subparsers)
    segment.add_subparser(subparsers)
    review.add_subparser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
