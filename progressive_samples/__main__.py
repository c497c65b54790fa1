"""CLI entry point for progressive_samples.

Invoke as:  python -m progressive_samples --kind pmj --count 64 --print
"""

import argparse
import sys

from . import SEQUENCES
from ._common import DEFAULT_SEED
from .diagrams import (
    DEFAULT_OUT_DIR,
    diagram_comparison,
    diagram_progressive,
    diagram_sequence,
    diagram_strata,
)
from .jittered import JitteredSequence
from .verify import check_progressive

# ---------------------------------------------------------------------------
# Diagram registry
# ---------------------------------------------------------------------------

DIAGRAMS = {
    "sequence": "one sequence with its cell grid (uses --kind)",
    "comparison": "uniform, PJ and PMJ side by side",
    "progressive": "prefixes of one sequence coloured by round (uses --kind)",
    "strata": "multi-jittered points with their x/y strata",
}


def render_diagram(name, args):
    """Render one registered diagram; returns the written path."""
    if name == "sequence":
        sequence = SEQUENCES[args.kind](args.seed)
        return diagram_sequence(sequence, args.count, args.out, f"{args.kind}_sequence.png")
    if name == "comparison":
        return diagram_comparison(args.count, args.seed, args.out)
    if name == "progressive":
        return diagram_progressive(args.count, args.seed, args.out, SEQUENCES[args.kind])
    if name == "strata":
        return diagram_strata(args.count, args.seed, args.out)
    raise KeyError(name)


def extend_reporting(sequence, count):
    """Extend one level at a time, printing each round as it completes."""
    if not isinstance(sequence, JitteredSequence):
        sequence.extend(count)
        print(f"generated: 0 -> {sequence.generated}")
        return
    level = 1
    while True:
        before = sequence.generated
        sequence.extend(min(level, count))
        if sequence.generated != before:
            print(f"generated: {before} -> {sequence.generated}")
        if level >= count:
            break
        level *= 4


def print_points(sequence):
    fixed = isinstance(sequence, JitteredSequence) or getattr(sequence, "fixed_point", False)
    for k, point in enumerate(sequence.points()):
        x01, y01 = sequence.to01(point)
        if fixed:
            print(f"{k:6d}  {int(point[0]):8d} {int(point[1]):8d}  {x01:.7f} {y01:.7f}")
        else:
            print(f"{k:6d}  {x01:.7f} {y01:.7f}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate progressive 2D sample sequences."
    )
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--print", action="store_true", help="Print the generated points")
    group.add_argument(
        "--check", action="store_true", help="Check grid/stratum invariants of every level"
    )
    group.add_argument("--diagram", help="Diagram to render (name or 'all')")
    group.add_argument("--list", action="store_true", help="List available diagrams")
    parser.add_argument("--kind", choices=sorted(SEQUENCES), default="pmj")
    parser.add_argument("--count", type=int, default=256, help="Number of samples")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED)
    parser.add_argument("--out", default=DEFAULT_OUT_DIR, help="Diagram output directory")
    parser.add_argument("--verbose", action="store_true", help="Report each refinement round")
    args = parser.parse_args(argv)

    if args.list:
        print("Available diagrams:")
        for name, description in DIAGRAMS.items():
            print(f"  {name:12s} {description}")
        print(f"\n{len(DIAGRAMS)} diagrams total.")
        return 0

    if args.diagram is not None:
        names = list(DIAGRAMS) if args.diagram == "all" else [args.diagram]
        for name in names:
            if name not in DIAGRAMS:
                print(f"No diagram named '{name}'.")
                print("Use --list to see available diagrams.")
                return 1
        try:
            for name in names:
                render_diagram(name, args)
        except ValueError as exc:
            print(f"error: {exc}")
            return 1
        print(f"\nGenerated {len(names)} diagram(s).")
        return 0

    try:
        sequence = SEQUENCES[args.kind](args.seed)
        if args.verbose:
            extend_reporting(sequence, args.count)
        else:
            sequence.extend(args.count)
    except ValueError as exc:
        print(f"error: {exc}")
        return 1

    if args.print:
        print_points(sequence)
        return 0

    if args.kind == "uniform":
        print("uniform samples carry no structural invariants; nothing to check.")
        return 0

    failures = check_progressive(sequence.points(), stratified=args.kind == "pmj")
    for line in failures:
        print(f"  FAIL {line}")
    if failures:
        print(f"\n{len(failures)} check(s) failed for {args.kind}, {args.count} points.")
        return 1
    print(f"All levels OK for {args.kind}, {args.count} points (seed {args.seed}).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
