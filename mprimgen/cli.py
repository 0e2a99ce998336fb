"""Command-line interface for the motion primitive generator."""

import argparse
import logging
import sys

import mprimgen.config as cfg
from mprimgen.config import TRACE, GenerationConfig, MobilityProfile
from mprimgen.primitives.generator import generate_primitives
from mprimgen.utils.errors import ConfigurationError

logger = logging.getLogger("mprimgen.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate lattice planner motion primitives"
    )
    parser.add_argument(
        "-o", "--output", help="Output .mprim file (default: stdout)"
    )

    grid = parser.add_argument_group("discretization")
    grid.add_argument(
        "--grid-size", type=float, default=cfg.GRID_SIZE_DEFAULT, help="Cell size in m"
    )
    grid.add_argument(
        "--num-angles",
        type=int,
        default=cfg.NUM_ANGLES_DEFAULT,
        help="Number of discrete headings",
    )
    grid.add_argument(
        "--partition",
        type=int,
        default=cfg.NUM_PRIM_PARTITION_DEFAULT,
        help="Primitives per base primitive and heading (1, 2, 4 or 8)",
    )
    grid.add_argument(
        "--accuracy",
        type=float,
        default=cfg.PRIM_ACCURACY_DEFAULT,
        help="Max distance (cells) between continuous and rounded end position",
    )
    grid.add_argument(
        "--poses",
        type=int,
        default=cfg.NUM_POSES_PER_PRIM_DEFAULT,
        help="Intermediate poses per primitive (>= 2)",
    )

    mob = parser.add_argument_group("mobility (cost multiplier, 0 disables)")
    mob.add_argument("--forward", type=int, default=1)
    mob.add_argument("--backward", type=int, default=0)
    mob.add_argument("--lateral", type=int, default=0)
    mob.add_argument("--point-turn", type=int, default=0)
    mob.add_argument("--forward-turn", type=int, default=0)
    mob.add_argument("--backward-turn", type=int, default=0)
    mob.add_argument("--speed", type=float, default=1.0, help="Nominal speed in m/s")
    mob.add_argument(
        "--min-turning-radius", type=float, default=0.0, help="Turning radius in m"
    )

    parser.add_argument(
        "--workers", type=int, default=1, help="Processes used to expand headings"
    )

    # Verbose logging options
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity; -v=INFO, -vv=DEBUG, -vvv=TRACE",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Enable quiet logging (ERROR level)",
    )
    parser.add_argument(
        "--log-level",
        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set specific log level",
    )
    return parser


def _resolve_log_level(args: argparse.Namespace) -> int:
    # Precedence:
    #   1) Explicit --log-level
    #   2) Verbose / quiet flags
    #   3) Environment-driven TRACE (MPRIMGEN_TRACE=1 via TRACE_ENABLED)
    #   4) LOG_LEVEL_DEFAULT (MPRIMGEN_LOG_LEVEL, WARNING unless set)
    if args.log_level:
        if args.log_level == "TRACE":
            cfg.TRACE_ENABLED = True
            return TRACE
        return getattr(logging, args.log_level)
    if args.verbose >= 3:
        cfg.TRACE_ENABLED = True
        return TRACE
    if args.verbose == 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    if args.quiet:
        return logging.ERROR
    if cfg.TRACE_ENABLED:
        return TRACE
    return logging.getLevelName(cfg.LOG_LEVEL_DEFAULT)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the generator."""
    args = build_parser().parse_args(argv)

    log_level = _resolve_log_level(args)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    third_party_log_level = log_level if log_level >= logging.INFO else logging.INFO
    logging.getLogger("numba").setLevel(third_party_log_level)

    try:
        mobility = MobilityProfile(
            multiplier_forward=args.forward,
            multiplier_backward=args.backward,
            multiplier_lateral=args.lateral,
            multiplier_point_turn=args.point_turn,
            multiplier_forward_turn=args.forward_turn,
            multiplier_backward_turn=args.backward_turn,
            speed=args.speed,
            min_turning_radius=args.min_turning_radius,
        )
        config = GenerationConfig(
            grid_size=args.grid_size,
            num_angles=args.num_angles,
            num_prim_partition=args.partition,
            prim_accuracy=args.accuracy,
            num_poses_per_prim=args.poses,
        )
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    # Pre-compile numba JIT functions before the search loops
    from mprimgen.utils.warmup import warmup_jit

    warmup_jit()

    table = generate_primitives(mobility, config, workers=max(1, args.workers))

    if args.output:
        table.write(args.output)
    else:
        table.write(sys.stdout)
    return 0


def main_entry():
    """Entry point for the mprimgen command."""
    raise SystemExit(main())


if __name__ == "__main__":
    main_entry()
