#!/usr/bin/env python3
"""
Clear a user's recommendation history from the command line.

    python scripts/clear_user_history.py 42 --mode food
    python scripts/clear_user_history.py 42 --dry-run
"""

import argparse
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from sqlmodel import Session
from config.database import engine
from models import Mode, User
from services.recommendation import HistoryManager, RecommendationService


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Clear recommendation history for a user")
    parser.add_argument("user_id", type=int)
    parser.add_argument("--mode", choices=[m.value for m in Mode], default=None)
    parser.add_argument("--dry-run", action="store_true", help="only report how many events would go")
    args = parser.parse_args(argv)

    mode = Mode(args.mode) if args.mode else None

    with Session(engine) as session:
        if not session.get(User, args.user_id):
            print(f"User {args.user_id} not found")
            return 1

        pending = HistoryManager(session).count(args.user_id, mode)
        scope = mode.value if mode else "all modes"
        print(f"User {args.user_id}: {pending} event(s) in {scope}")

        if args.dry_run:
            return 0

        if not RecommendationService(session).clear_history(args.user_id, mode):
            print("Failed to clear history")
            return 1

    print("History cleared")
    return 0


if __name__ == "__main__":
    sys.exit(main())
