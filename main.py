"""Main entry point for the ant colony simulation.

Runs the simulation headless in fixed-size ticks and logs colony
statistics as it goes.
"""

import argparse
import logging

from antsim.config import SimulationConfig, world
from antsim.logging_config import configure_logging

logger = logging.getLogger(__name__)


def run_headless(
    seconds: float,
    tick_ms: float,
    stats_interval: float,
    seed=None,
    ants=None,
    food_sources=None,
    export_snapshot=None,
):
    """Run the simulation without any host.

    Args:
        seconds: Host time to simulate
        tick_ms: Fixed tick length in milliseconds
        stats_interval: Log stats every N simulated seconds (0 = only at the end)
        seed: Optional random seed for deterministic behavior
        ants: Founding population (default from config)
        food_sources: Initial food source count (default from config)
        export_snapshot: Optional filename for a final JSON snapshot
    """
    from antsim.simulation import SimulationEngine

    config = SimulationConfig(seed=seed)
    if ants is not None:
        config.ant_count = ants
    if food_sources is not None:
        config.food.initial_sources = food_sources

    engine = SimulationEngine(config)
    return engine.run_headless(
        seconds=seconds,
        tick_ms=tick_ms,
        stats_interval_s=stats_interval,
        export_path=export_snapshot,
    )


def main():
    """Parse command-line arguments and run the simulation."""
    parser = argparse.ArgumentParser(
        description="Ant Colony Simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Two simulated minutes with stats every 10 seconds
  python main.py --seconds 120 --stats-interval 10

  # Reproducible run with a small colony
  python main.py --seed 42 --ants 20 --food-sources 5

  # Export the final world state
  python main.py --seconds 300 --export-snapshot final.json

  # System messages at DEBUG without per-ant chatter
  python main.py --log-level DEBUG --entity-log-level WARNING
        """,
    )

    parser.add_argument(
        "--seconds", type=float, default=60.0, help="Host seconds to simulate (default: 60)"
    )
    parser.add_argument(
        "--tick-ms",
        type=float,
        default=world.DEFAULT_TICK_MS,
        help="Tick length in milliseconds (default: 1000/60)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )
    parser.add_argument(
        "--ants", type=int, default=None, help=f"Founding ant count (default: {world.DEFAULT_ANT_COUNT})"
    )
    parser.add_argument(
        "--food-sources", type=int, default=None, help="Initial food source count (optional)"
    )
    parser.add_argument(
        "--stats-interval",
        type=float,
        default=10.0,
        help="Log stats every N simulated seconds, 0 to disable (default: 10)",
    )
    parser.add_argument(
        "--export-snapshot",
        type=str,
        default=None,
        metavar="FILENAME",
        help="Write the final world snapshot and stats to a JSON file",
    )
    parser.add_argument(
        "--log-level", type=str, default=None, help="Log level (default: ANTSIM_LOG_LEVEL or INFO)"
    )
    parser.add_argument(
        "--entity-log-level",
        type=str,
        default=None,
        help="Log level for per-ant messages (default: ANTSIM_ENTITY_LOG_LEVEL or --log-level)",
    )

    args = parser.parse_args()
    if args.tick_ms <= 0:
        parser.error("--tick-ms must be positive")
    if args.seconds < 0:
        parser.error("--seconds must not be negative")

    configure_logging(level=args.log_level, entity_level=args.entity_log_level, extra_loggers=[__name__])

    logger.info("Starting headless simulation...")
    logger.info("Configuration: %.1f s in %.2f ms ticks", args.seconds, args.tick_ms)
    if args.export_snapshot:
        logger.info("Snapshot will be exported to: %s", args.export_snapshot)

    run_headless(
        args.seconds,
        args.tick_ms,
        args.stats_interval,
        seed=args.seed,
        ants=args.ants,
        food_sources=args.food_sources,
        export_snapshot=args.export_snapshot,
    )


if __name__ == "__main__":
    main()
