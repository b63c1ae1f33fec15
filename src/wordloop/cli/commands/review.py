"""
Interactive flashcard review.
"""

import sys

import httpx

from wordloop.cli import client


GRADES = {"1": 1, "a": 1, "3": 3, "h": 3, "4": 4, "g": 4, "5": 5, "e": 5}


def add_subparser(subparsers):
    parser = subparsers.add_parser("review", help="Review due words")
    parser.add_argument("--shuffle", action="store_true", help="Shuffle the due words")
    parser.set_defaults(func=run)


def _fmt_days(days: float) -> str:
    if days < 1:
        return f"{round(days * 24 * 60)}m"
    return f"{days:g}d"


def run(args):
    try:
        session = client.start_review(shuffle=args.shuffle)
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)

    stats = session["stats"]
    print(f"{stats['due_now']} due now, {stats['due_today']} due today, {stats['total']} words")

    if session["state"] == "empty":
        print("✓ All caught up!")
        return

    session_id = session["id"]
    try:
        while session["state"] == "presenting":
            print()
            print(f"[{session['position']}/{session['total']}]  {session['card']['word']}")
            input("  (enter to show answer) ")

            session = client.reveal(session_id)
            card = session["card"]
            intervals = session["intervals"]
            print(f"  {card['romanization']}")
            print(f"  {'; '.join(card['meanings'])}")
            print(
                f"  [a]gain {_fmt_days(intervals['again'])}  "
                f"[h]ard {_fmt_days(intervals['hard'])}  "
                f"[g]ood {_fmt_days(intervals['good'])}  "
                f"[e]asy {_fmt_days(intervals['easy'])}"
            )

            answer = ""
            while answer not in GRADES:
                answer = input("  grade: ").strip().lower()

            session = client.grade(session_id, GRADES[answer])

        print(f"\n✓ Session complete, {session['reviewed']} reviewed")
    except (KeyboardInterrupt, EOFError):
        print("\nStopped.")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)
    finally:
        try:
            client.end_review(session_id)
        except httpx.HTTPError as e:
            print(f"✗ Could not close session {session_id}: {e}")
