"""
02_check_boundaries.py
----------------------
Cross-checks the community names in data/crimeByCommunity.csv
against the community area features in data/chitown.topojson.

A name on either side without a match means a community that is
drawn grey on the map, or a count that is never shown. Exits with
status 1 when any mismatch is found.

Run from project root:
    python processing/02_check_boundaries.py
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from utils.data_loaders import read_inputs
from utils.prepare import nest_by_year, parse_crime_by_community


def compare(count_names: set, map_names: set) -> tuple:
    """(names only in the counts, names only on the map), each sorted."""
    return sorted(count_names - map_names), sorted(map_names - count_names)


def main():
    print("02_check_boundaries.py")
    print("=" * 50)

    print("Loading inputs...")
    _, by_community, communities = read_inputs()
    map_names = set(communities["community"].dropna().astype(str))
    print(f"  {len(map_names)} community areas on the map")

    nested = nest_by_year(parse_crime_by_community(by_community))
    failed = False

    for year, counts in nested.items():
        count_names = set(counts["community"].dropna().astype(str))
        only_counts, only_map = compare(count_names, map_names)
        if only_counts:
            failed = True
            print(f"  WARNING [{year}]: not on the map: {only_counts}")
        if only_map:
            failed = True
            print(f"  WARNING [{year}]: no count for: {only_map}")
        if not only_counts and not only_map:
            print(f"  [{year}] all {len(count_names)} communities matched")

    if failed:
        print("\n✗ Community names do not line up with the map boundaries.")
        sys.exit(1)
    print("\n✓ All community names match the map boundaries.")


if __name__ == "__main__":
    main()
