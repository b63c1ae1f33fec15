"""
Segment text into words.
"""

import sys

from rich import print_json

from wordloop.cli import client


def add_subparser(subparsers):
    parser = subparsers.add_parser("segment", help="Segment Chinese text into words")
    parser.add_argument("text", help="Text to segment")
    parser.add_argument("--annotate", action="store_true",
                        help="Use known words only (no LLM, nothing learned)")
    parser.add_argument("--prompt", help="Override the segmentation prompt")
    parser.add_argument("--json", action="store_true", help="Print raw JSON")
    parser.set_defaults(func=run)


def run(args):
    try:
        if args.annotate:
            result = client.annotate(args.text)
        else:
            result = client.segment(args.text, args.prompt)
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)

    if args.json:
        print_json(data=result)
        return

    for seg in result["segments"]:
        translation = seg["translation"] or ""
        print(f"{seg['word']:8} {seg['romanization']:20} {translation}")

    if result.get("failed"):
        print(f"\n✗ {result['failed']} sentence(s) could not be segmented")
