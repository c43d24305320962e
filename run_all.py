"""
run_all.py
----------
Runs the full processing pipeline in order.
Execute from the project root:

    python run_all.py

Optional flags:
    python run_all.py --from 02 # start from script 02 onwards
    python run_all.py --only 01 # run only script 01
"""

import argparse
import subprocess
import sys

SCRIPTS = [
    ("01", "processing/01_aggregate_crimes.py"),
    ("02", "processing/02_check_boundaries.py"),
]


def select_scripts(from_script=None, only_scripts=None) -> list:
    """
    Scripts to run, in pipeline order.

    Raises ValueError for a --from number that is not in SCRIPTS.
    Unknown --only numbers are reported and ignored.
    """
    if only_scripts:
        chosen = [(n, p) for n, p in SCRIPTS if n in only_scripts]
        unknown = set(only_scripts) - {n for n, _ in chosen}
        if unknown:
            print(f"Warning: script numbers not found: {', '.join(sorted(unknown))}")
        return chosen

    if from_script:
        numbers = [n for n, _ in SCRIPTS]
        if from_script not in numbers:
            raise ValueError(
                f"script '{from_script}' not found. Valid numbers: {', '.join(numbers)}"
            )
        return SCRIPTS[numbers.index(from_script):]

    return list(SCRIPTS)


def run_script(number: str, path: str) -> int:
    """Run one script with its output streaming to the terminal; returns the exit code."""
    print(f"\n── [{number}] {path}")
    return subprocess.run([sys.executable, path]).returncode


def main():
    parser = argparse.ArgumentParser(description="Build the Chicago crime map input files")
    parser.add_argument("--from", dest="from_script", metavar="N",
                        help="Start from script N (e.g. --from 02 skips 01)")
    parser.add_argument("--only", dest="only_scripts", metavar="N", nargs="+",
                        help="Run only these script numbers (e.g. --only 01)")
    args = parser.parse_args()

    try:
        scripts = select_scripts(args.from_script, args.only_scripts)
    except ValueError as e:
        sys.exit(f"Error: {e}")

    for number, path in scripts:
        code = run_script(number, path)
        if code != 0:
            print(f"\n[{number}] exited with code {code}.")
            sys.exit(f"Fix the error above, then resume with:  python run_all.py --from {number}")

    if scripts:
        print("\nInput files ready. Start the dashboard with:  streamlit run app.py")


if __name__ == "__main__":
    main()
