"""Command-line interface for Aegis - learning condition replay and status."""

import argparse
import json
import logging
from pathlib import Path

from rich.console import Console

from aegis import __version__

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO", verbose: bool = False) -> None:
    """Configure root logging for the CLI process."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        force=True,
    )


def cmd_replay(args: argparse.Namespace) -> int:
    """Replay a JSONL scenario through a learning session."""
    from aegis.adapters.synthetic import SyntheticFeatureAdapter
    from aegis.config import get_config, reload_config
    from aegis.core.session import LearningSession
    from aegis.errors import AegisError
    from aegis.ui.panels import condition_table, decision_text, drivers_table

    console = Console()

    scenario_path = Path(args.scenario)
    if not scenario_path.exists():
        print(f"Error: Scenario file not found: {scenario_path}")
        return 1

    config = reload_config(args.config) if args.config else get_config()
    configure_logging(config.LOG_LEVEL, args.verbose)

    tick_s = args.tick_s if args.tick_s is not None else config.SESSION_TICK_S
    logger.debug(f"Replaying {scenario_path} with a {tick_s:g}s tick")

    try:
        # Scenario samples carry their own telemetry, so no tier-0 synthesis
        session = LearningSession(
            estimator_config=config.estimator_config(),
            policy_config=config.policy_config(),
            synthesize_tier0=False,
        )
        adapter = SyntheticFeatureAdapter(scenario_path, tick_s=tick_s)

        if not args.json:
            console.print(f"\n{adapter.get_timeline_summary()}\n")
            console.rule()

        for result in adapter.replay(session):
            if args.json:
                print(json.dumps(result.to_dict()))
                continue

            console.print(condition_table(result.state))
            if args.verbose:
                console.print(drivers_table(result.state))
            console.print(decision_text(result.decision))
            console.print()

    except AegisError as e:
        print(f"Error: {e}")
        return 1

    if args.json:
        return 0

    stats = session.get_stats()
    console.rule()
    print("\nSummary:")
    print(f"  States emitted: {stats['states_emitted']}")
    print(f"  Interventions: {stats['interventions']}")
    print(f"  Samples rejected: {stats['samples_rejected']}")
    print(f"  Final cooldown: {stats['policy']['cooldown_s']:g}s")
    print(f"  Adapter stats: {adapter.stats}")
    print(f"  Policy abstentions: {stats['policy']['abstentions']}")

    return 0


def cmd_status(args: argparse.Namespace) -> int:
    """Show resolved configuration."""
    from aegis.config import get_config, reload_config

    config = reload_config(args.config) if args.config else get_config()

    print(f"Aegis {__version__} Status")
    print("=" * 50)
    print(f"\nConfig file: {config.config_path or '(defaults)'}")

    errors = config.validate()
    if errors:
        print("\nConfiguration errors:")
        for error in errors:
            print(f"  - {error}")
        return 1

    print("\nConfiguration: OK")

    estimator = config.estimator_config()
    print("\nEstimator:")
    print(f"  Window: {estimator.window_s:g}s")
    print(f"  Emit interval: {estimator.emit_interval_s:g}s")
    print(f"  Confidence threshold: {estimator.confidence_threshold}")

    policy = config.policy_config()
    print("\nPolicy:")
    print(f"  Confidence threshold: {policy.confidence_threshold}")
    print(f"  Sustained window: {policy.sustained_window_s:g}s")
    print(f"  Cooldown: {policy.cooldown_s:g}s")
    print(f"  Max per 10 min: {policy.max_per_10min}")
    print(f"  Preferences: {policy.preferences.model_dump()}")

    print(f"\nSession tick: {config.SESSION_TICK_S:g}s")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aegis",
        description="Aegis - learning condition estimation and intervention policy",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # aegis replay <scenario.jsonl>
    replay_parser = subparsers.add_parser(
        "replay",
        help="Replay a JSONL feature scenario",
    )
    replay_parser.add_argument(
        "scenario",
        help="Path to JSONL scenario file",
    )
    replay_parser.add_argument(
        "--tick-s",
        type=float,
        default=None,
        dest="tick_s",
        help="Seconds of scenario time between ticks (default: SESSION_TICK_S)",
    )
    replay_parser.add_argument(
        "--config",
        default=None,
        help="Path to a config.py (default: search cwd and parents)",
    )
    replay_parser.add_argument(
        "--json",
        action="store_true",
        help="Print one JSON object per emitted state",
    )
    replay_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging and driver tables",
    )
    replay_parser.set_defaults(func=cmd_replay)

    # aegis status
    status_parser = subparsers.add_parser(
        "status",
        help="Show resolved configuration",
    )
    status_parser.add_argument(
        "--config",
        default=None,
        help="Path to a config.py (default: search cwd and parents)",
    )
    status_parser.set_defaults(func=cmd_status)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
