"""
Load the demo Mysuru/Bengaluru fleet into the configured database.
Run from backend/ directory: python seed_demo_data.py [--force] [--seed N]
"""
import argparse
import random

from busbuddy.database import Base, SessionLocal, engine
from busbuddy.services.seed import seed_demo_data


def main():
    parser = argparse.ArgumentParser(description="Seed BusBuddy demo data")
    parser.add_argument("--force", action="store_true", help="wipe existing rows before seeding")
    parser.add_argument("--seed", type=int, default=None, help="random seed for reproducible data")
    args = parser.parse_args()

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        counts = seed_demo_data(db, rng=random.Random(args.seed), force=args.force)
    finally:
        db.close()

    print("=" * 40)
    print("  BusBuddy demo data")
    print("=" * 40)
    for name, count in counts.items():
        print(f"  {name:<10} {count}")
    if not any(counts.values()):
        print("\nDatabase already has buses. Use --force to reseed.")


if __name__ == "__main__":
    main()
