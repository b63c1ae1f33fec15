"""
Dictionary commands.
"""

import sys
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.table import Table

from wordloop.cli import client


def add_subparser(subparsers):
    parser = subparsers.add_parser("words", help="Dictionary management")
    words_sub = parser.add_subparsers(dest="words_command", required=True)

    # list
    list_p = words_sub.add_parser("list", help="List learned words")
    list_p.add_argument("--due", action="store_true", help="Only words due for review")
    list_p.set_defaults(func=words_list)

    # show
    show_p = words_sub.add_parser("show", help="Show one word")
    show_p.add_argument("word", help="The word")
    show_p.set_defaults(func=words_show)

    # add
    add_p = words_sub.add_parser("add", help="Add a word")
    add_p.add_argument("word", help="The word")
    add_p.add_argument("translation", help="English meaning")
    add_p.add_argument("--romanization", default="", help="Pinyin")
    add_p.set_defaults(func=words_add)

    # import
    import_p = words_sub.add_parser("import", help="Import words from an exported JSON file")
    import_p.add_argument("file", help="Path to JSON file")
    import_p.set_defaults(func=words_import)

    # export
    export_p = words_sub.add_parser("export", help="Export words as JSON")
    export_p.add_argument("--out", help="Write to file instead of stdout")
    export_p.set_defaults(func=words_export)

    # clear
    clear_p = words_sub.add_parser("clear", help="Delete every word")
    clear_p.add_argument("--yes", action="store_true", help="Skip confirmation")
    clear_p.set_defaults(func=words_clear)

    # stats
    stats_p = words_sub.add_parser("stats", help="Review statistics")
    stats_p.set_defaults(func=words_stats)


def _fmt_time(ms: int) -> str:
    if not ms:
        return "never"
    return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M")


def words_list(args):
    try:
        words = client.list_words(due=args.due)
        if not words:
            print("No words.")
            return

        table = Table()
        table.add_column("word")
        table.add_column("pinyin")
        table.add_column("meaning")
        table.add_column("seen", justify="right")
        table.add_column("next review")
        for w in words:
            table.add_row(
                w["word"],
                w["romanization"],
                "; ".join(w["meanings"]),
                str(w["usage_count"]),
                _fmt_time(w["next_review_at"]),
            )
        Console().print(table)
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def words_show(args):
    try:
        w = client.get_word(args.word)
        print(f"Word: {w['word']}")
        print(f"Pinyin: {w['romanization']}")
        print(f"Meanings: {'; '.join(w['meanings'])}")
        print(f"Added: {_fmt_time(w['added_at'])}")
        print(f"Seen: {w['usage_count']} times")
        print()
        print(f"Reviews: {w['review_count']}")
        print(f"Interval: {w['interval_days']:.2f} days")
        print(f"Ease: {w['ease_factor']:.2f}")
        print(f"Last reviewed: {_fmt_time(w['last_reviewed_at'])}")
        print(f"Next review: {_fmt_time(w['next_review_at'])}")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def words_add(args):
    try:
        result = client.add_words([{
            "word": args.word,
            "romanization": args.romanization,
            "translation": args.translation,
        }])
        print(f"✓ Added {args.word} ({result['total']} words total)")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def words_import(args):
    path = Path(args.file)
    if not path.exists():
        print(f"✗ File not found: {args.file}")
        sys.exit(1)

    try:
        result = client.import_words(path.read_text(encoding="utf-8"))
        print(f"✓ Imported {result['imported']} meanings ({result['total']} words total)")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def words_export(args):
    try:
        data = client.export_words()
        if args.out:
            Path(args.out).write_text(data, encoding="utf-8")
            print(f"✓ Exported to {args.out}")
        else:
            print(data)
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def words_clear(args):
    if not args.yes:
        answer = input("Delete every word? [y/N] ")
        if answer.strip().lower() != "y":
            print("Aborted.")
            return

    try:
        client.clear_words()
        print("✓ Dictionary cleared")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def words_stats(args):
    try:
        s = client.word_stats()
        print(f"Due now:   {s['due_now']}")
        print(f"Due today: {s['due_today']}")
        print(f"Words:     {s['total']}")
        print(f"Meanings:  {s['total_meanings']}")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)
