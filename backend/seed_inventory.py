"""Seed the configured store with the demo medicine catalogue."""
import argparse

from medshop.core.config import configure_logging
from medshop.db.init_db import open_store
from medshop.services.sample_data import generate_sample_data


def seed_inventory(seed=None):
    store = open_store()
    counts = generate_sample_data(store, seed=seed)
    for name, count in counts.items():
        print(f"[OK] {count} {name.replace('_', ' ')} added")
    return counts


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=int, default=None, help="random seed for repeatable data")
    args = parser.parse_args()
    configure_logging()
    seed_inventory(seed=args.seed)
