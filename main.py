#!/usr/bin/env python3
"""
Season Progression Engine - command-line runner

Builds a seeded league and simulates whole years through the regular
season, playoffs and offseason, printing a summary per season.

Usage:
    # One season with the default seed
    PYTHONPATH=src python main.py

    # Three seasons, reproducible, snapshot saved at the end
    PYTHONPATH=src python main.py --seasons 3 --seed 7 --save snapshots/league.json

    # Verbose engine logging
    PYTHONPATH=src python main.py --log-level DEBUG --log-file

    # Development preset with DEBUG output from the offseason packages
    PYTHONPATH=src python main.py --log-preset development --debug-subsystem offseason
"""

import argparse
import sys
from pathlib import Path


# Add project paths
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from config.season_settings import SeasonSettings  # noqa: E402
from logging_config import (  # noqa: E402
    get_logger, log_exception, setup_calendar_logging, setup_development_logging,
    setup_logging, setup_offseason_logging, setup_playoff_logging,
    setup_production_logging, setup_testing_logging
)
from offseason.offseason_exceptions import OffseasonException  # noqa: E402
from persistence.snapshot_serializer import save_snapshot  # noqa: E402
from season.season_cycle_controller import SeasonCycleController  # noqa: E402
from shared.league_exceptions import LeagueException  # noqa: E402
from team_management.league_factory import LeagueFactory  # noqa: E402


LOG_PRESETS = {
    "production": setup_production_logging,
    "development": setup_development_logging,
    "testing": setup_testing_logging,
}

SUBSYSTEM_LOGGING = {
    "calendar": setup_calendar_logging,
    "playoffs": setup_playoff_logging,
    "offseason": setup_offseason_logging,
}


def print_season_summary(controller: SeasonCycleController, summary: dict) -> None:
    """Print one simulated year."""
    league = controller.state
    print(f"\n{'=' * 60}")
    print(f"{'SEASON ' + str(summary['season']):^60}")
    print(f"{'=' * 60}")

    regular = summary.get("regular_season")
    if regular is not None:
        best = league.team(regular["best_team_id"])
        print(f"Regular season: {regular['games_played']} games over {regular['weeks']} weeks")
        print(f"Best record:    {best.full_name} ({regular['best_record']})")

    playoffs = summary.get("playoffs")
    if playoffs is not None:
        champion = league.team(playoffs["champion_id"])
        runner_up = league.team(playoffs["runner_up_id"])
        print(f"Champion:       {champion.full_name} (def. {runner_up.full_name})")

    offseason = summary.get("offseason")
    if offseason is not None:
        print(f"Offseason:      {offseason['phases_visited']} phases, "
              f"{offseason['draft_selections']} draft picks, {offseason['final_cuts']} final cuts")
    print(f"Now:            {league.calendar}")


def build_parser() -> argparse.ArgumentParser:
    """Command-line options for the season runner."""
    parser = argparse.ArgumentParser(
        description="Simulate seasons of a 32-team league",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py --seasons 2
    python main.py --seed 7 --save snapshots/league.json
    python main.py --log-preset development --debug-subsystem offseason
        """
    )
    parser.add_argument(
        '--seasons',
        type=int,
        default=1,
        help='Number of full years to simulate (default: 1)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=SeasonSettings.DEFAULT_SEED,
        help=f'Seed for league, schedules and games (default: {SeasonSettings.DEFAULT_SEED})'
    )
    parser.add_argument(
        '--start-year',
        type=int,
        default=SeasonSettings.DEFAULT_START_YEAR,
        help=f'First season year (default: {SeasonSettings.DEFAULT_START_YEAR})'
    )
    parser.add_argument(
        '--save',
        help='Write the final league snapshot to this JSON file'
    )
    parser.add_argument(
        '--log-level',
        default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Console log level (default: WARNING)'
    )
    parser.add_argument(
        '--log-file',
        action='store_true',
        help='Also write rotating log files under logs/'
    )
    parser.add_argument(
        '--log-preset',
        choices=sorted(LOG_PRESETS),
        help='Use a logging preset instead of --log-level/--log-file'
    )
    parser.add_argument(
        '--log-dir',
        default='logs',
        help='Directory for log files (default: logs)'
    )
    parser.add_argument(
        '--debug-subsystem',
        action='append',
        default=[],
        choices=sorted(SUBSYSTEM_LOGGING),
        help='Log one subsystem at DEBUG (repeatable)'
    )
    return parser


def configure_logging(args: argparse.Namespace) -> None:
    """Apply the logging options: preset or level, then subsystem overrides."""
    if args.log_preset == "testing":
        setup_testing_logging()
    elif args.log_preset is not None:
        LOG_PRESETS[args.log_preset](args.log_dir)
    else:
        setup_logging(
            level=args.log_level,
            log_dir=args.log_dir,
            enable_file=args.log_file,
            format_style="simple"
        )

    for subsystem in args.debug_subsystem:
        SUBSYSTEM_LOGGING[subsystem]("DEBUG")


def main(argv=None) -> int:
    """Main entry point for the season runner."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.seasons < 1:
        parser.error("--seasons must be at least 1")

    configure_logging(args)
    logger = get_logger(__name__)

    league = LeagueFactory(args.seed).create_league(args.start_year)
    controller = SeasonCycleController(league, seed=args.seed)
    logger.info(f"Simulating {args.seasons} season(s) from {league.calendar} with seed {args.seed}")

    try:
        for _ in range(args.seasons):
            summary = controller.simulate_full_year()
            print_season_summary(controller, summary)
    except (LeagueException, OffseasonException) as e:
        log_exception(logger, e, {"calendar": controller.calendar, "seed": args.seed})
        print(f"\nSimulation stopped at {controller.calendar}: {e}")
        return 1

    if args.save:
        path = save_snapshot(controller.state, args.save)
        print(f"\nSnapshot saved: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
