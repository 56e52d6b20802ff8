"""CLI entrypoint for the road grid generator."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, List

from roadgen.core.constants import GenerationRule, GrowthMode
from roadgen.core.exceptions import RoadGenError
from roadgen.data.builtin import default_catalog
from roadgen.data.catalog import TileCatalog
from roadgen.engine.generator import GeneratorConfig, RoadGenerator
from roadgen.utils.logger import configure_logging, get_logger
from roadgen.utils.pretty import print_generation_stats


def parse_rule_priorities(entries: List[str]) -> Dict[str, int]:
    """Parse ``RULE=PRIORITY`` pairs, e.g. ``linearity=2``."""
    priorities: Dict[str, int] = {}
    for entry in entries:
        rule, _, priority = entry.partition("=")
        if not priority:
            raise ValueError(f"Expected RULE=PRIORITY, got {entry!r}")
        priorities[rule.strip().lower()] = int(priority)
    return priorities


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Procedurally generate a connected grid of road tiles",
    )
    parser.add_argument("--depth", type=int, required=True, help="Number of growth passes")
    parser.add_argument(
        "--magnitude",
        type=float,
        default=1.0,
        help="Target tile count as a multiple of depth",
    )
    parser.add_argument("--min-magnitude", type=float, help="Reject grids smaller than depth x this")
    parser.add_argument("--max-magnitude", type=float, help="Reject grids larger than depth x this")
    parser.add_argument(
        "--growth-mode",
        type=str,
        choices=[mode.value for mode in GrowthMode],
        default=GrowthMode.PASSES.value,
        help="Grow for a fixed number of passes or until the target size",
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        metavar="FILE",
        help="JSON tile catalog (defaults to the built-in square and diagonal road sets)",
    )
    parser.add_argument("--square-only", action="store_true", help="Only use square roads")
    parser.add_argument("--diagonal-only", action="store_true", help="Only use diagonal roads")
    parser.add_argument(
        "--axes",
        nargs="+",
        metavar="AXIS",
        help="Explicit valid axes (up, down, left, right, upright, upleft, downright, downleft)",
    )
    parser.add_argument("--separation", type=int, default=0, help="Minimum spacing between branches")
    parser.add_argument("--separation-radius", type=int, help="Cells marked around each branch")
    parser.add_argument(
        "--linearity",
        type=float,
        default=0.0,
        help="Initial probability that a road keeps going straight (0-1)",
    )
    parser.add_argument(
        "--linearity-curve",
        type=str,
        default="linear",
        help="Response curve for straight-run probability (linear, ease_in, ease_out, smoothstep)",
    )
    parser.add_argument(
        "--linearity-decay",
        type=float,
        default=0.0,
        help="Amount subtracted from the straight-run probability per tile",
    )
    parser.add_argument(
        "--rule-priority",
        nargs="+",
        default=[],
        metavar="RULE=PRIORITY",
        help=f"Rule priorities, higher first ({', '.join(r.value for r in GenerationRule)})",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--max-retries", type=int, default=10, help="Attempts before giving up")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument("--quiet", action="store_true", help="Skip the ASCII grid and stats")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    if args.square_only and args.diagonal_only:
        parser.error("--square-only cannot be combined with --diagonal-only")
    try:
        priorities = parse_rule_priorities(args.rule_priority)
    except ValueError as exc:
        parser.error(str(exc))

    config = GeneratorConfig(
        depth=args.depth,
        magnitude=args.magnitude,
        min_magnitude=args.min_magnitude,
        max_magnitude=args.max_magnitude,
        growth_mode=args.growth_mode,
        use_only_square=args.square_only,
        use_only_diagonal=args.diagonal_only,
        valid_axes=args.axes,
        separation=args.separation,
        separation_radius=args.separation_radius,
        linearity_coefficient=args.linearity,
        linearity_curve=args.linearity_curve,
        linearity_decay=args.linearity_decay,
        rule_priorities=priorities,
        seed=args.seed,
        max_retries=args.max_retries,
    )

    try:
        catalog = TileCatalog.from_json(args.catalog) if args.catalog else default_catalog()
        generator = RoadGenerator(config, catalog=catalog)
        result = generator.run()
    except RoadGenError as exc:
        get_logger().error("%s", exc)
        return 1

    if not args.quiet:
        print_generation_stats(result)

    if args.output:
        output_text = json.dumps(result.to_jsonable(), ensure_ascii=False, indent=2)
        args.output.write_text(output_text, encoding="utf-8")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
