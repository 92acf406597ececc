"""
Import Mysuru and/or Bengaluru depot timetables (text exports) as routes and
schedules.
Run from backend/ directory:
    python import_timetable.py --mysuru mysuru.txt --bengaluru bengaluru.txt [--seed N]
"""
import argparse
import random
import sys
from pathlib import Path

from busbuddy.database import Base, SessionLocal, engine
from busbuddy.services.timetable import import_timetable


def _read(path: str | None) -> str | None:
    if path is None:
        return None
    return Path(path).read_text(encoding="utf-8", errors="replace")


def main():
    parser = argparse.ArgumentParser(description="Import BusBuddy timetables")
    parser.add_argument("--mysuru", help="Mysuru City Bus Stand timetable (text)")
    parser.add_argument("--bengaluru", help="Bengaluru route list (text)")
    parser.add_argument("--seed", type=int, default=None, help="random seed for generated stops")
    args = parser.parse_args()

    if not args.mysuru and not args.bengaluru:
        parser.error("give at least one of --mysuru / --bengaluru")

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        result = import_timetable(
            db,
            mysuru_text=_read(args.mysuru),
            bengaluru_text=_read(args.bengaluru),
            rng=random.Random(args.seed),
        )
    finally:
        db.close()

    print("=" * 40)
    print("  BusBuddy timetable import")
    print("=" * 40)
    for city, counts in result.items():
        print(f"  {city:<10} {counts['routes']} routes, {counts['schedules']} schedules"
              f", {counts['failed']} failed")
    if any(counts["failed"] for counts in result.values()):
        sys.exit(1)


if __name__ == "__main__":
    main()
