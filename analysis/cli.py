"""Command-line interface for pitch scouting analysis."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from analysis.scouting.analyzer import ScoutingAnalyzer
from analysis.scouting.event_store import JsonEventStore
from analysis.scouting.report_generator import ReportGenerator, ScoutingReport
from configs.settings import DEFAULT_CONFIG, load_config
from contracts import PitchEvent
from exceptions import PitchScoutError
from log_config.logger import set_console_level


def _load_scope(args) -> List[PitchEvent]:
    """Events from the events file, narrowed by --pitcher and --game."""
    store = JsonEventStore(Path(args.events))
    if args.pitcher and args.game:
        return store.events_by_pitcher_and_game(args.pitcher, args.game)
    if args.pitcher:
        return store.events_by_pitcher(args.pitcher)
    if args.game:
        return store.events_by_game(args.game)
    return store.all_events()


def _analyzer(args) -> ScoutingAnalyzer:
    config = load_config(Path(args.config)) if args.config else DEFAULT_CONFIG
    return ScoutingAnalyzer(config)


def _print_json(data) -> None:
    print(json.dumps(data, indent=2))


def analyze_command(args) -> int:
    """Handle analyze command.

    Args:
        args: Parsed command-line arguments
    """
    result = _analyzer(args).analyze(_load_scope(args))

    if args.json:
        _print_json(result.to_dict())
        return 0

    if not result.has_data:
        print(result.message)
        return 0

    print(f"Total pitches: {result.total_pitches} (data quality: {result.quality})")
    print(f"Strike percentage: {result.rates.strike_percentage}%")
    print("\nPitch mix:")
    for pitch_type, pct in result.pitch_type_percentages.items():
        print(f"  {pitch_type}: {pct}%")

    print("\nPredictions:")
    if not result.predictions:
        print("  Not enough pitches in any situation")
    for prediction in result.predictions.values():
        print(
            f"  {prediction.situation}: {prediction.pitch_type} "
            f"({prediction.confidence}%, {prediction.sample_size} pitches)"
        )
    return 0


def fatigue_command(args) -> int:
    """Handle fatigue command.

    Args:
        args: Parsed command-line arguments
    """
    assessment = _analyzer(args).assess_fatigue(_load_scope(args))

    if args.json:
        _print_json(assessment.to_dict())
        return 0

    if not assessment.has_data:
        print(assessment.message)
        return 0

    print(f"Fatigue score: {assessment.score} ({assessment.warning_level})")
    print(f"Recommendation: {assessment.recommendation}")
    for indicator in assessment.indicators:
        suffix = " [heuristic]" if indicator.heuristic else ""
        print(f"  - {indicator.signal} ({indicator.severity}, +{indicator.points}): {indicator.detail}{suffix}")
    return 0


def advise_command(args) -> int:
    """Handle advise command.

    Args:
        args: Parsed command-line arguments
    """
    advice = _analyzer(args).build_advice(_load_scope(args))

    if args.json:
        _print_json(advice.to_dict())
        return 0

    if not advice.has_data:
        print(advice.message)
        return 0

    approach = advice.batter_approach
    print("Batter approach:")
    for line in (approach.general, approach.first_pitch, approach.two_strikes, approach.key_count.advice):
        if line:
            print(f"  - {line}")

    for side, cards in advice.by_batter_side.items():
        source = "all pitches" if cards.used_all_pitches else f"{cards.sample_size} pitches"
        print(f"\nVs {side} batters ({source}):")
        for card in (cards.general, cards.first_pitch, cards.two_strikes):
            print(f"  - {card.advice} ({card.confidence}%)")
        print(f"  - {cards.key_count.advice}")

    management = advice.pitcher_management
    print(f"\nPitcher management (fatigue risk: {management.fatigue_risk}):")
    for line in management.warnings + management.recommendations:
        print(f"  - {line}")

    print(f"\nGame strategy: {advice.game_strategy.overall}")
    print(f"In-game adjustments: {advice.in_game_adjustments.recommendation}")
    for line in advice.in_game_adjustments.adjustments:
        print(f"  - {line}")
    return 0


def report_command(args) -> int:
    """Handle report command.

    Args:
        args: Parsed command-line arguments
    """
    analyzer = _analyzer(args)
    events = _load_scope(args)

    report = ScoutingReport(
        analysis=analyzer.analyze(events),
        fatigue=analyzer.assess_fatigue(events),
        advice=analyzer.build_advice(events),
        pitcher_id=args.pitcher,
        game_id=args.game,
    )

    output_dir = Path(args.output)
    generator = ReportGenerator()

    if not args.no_json:
        json_path = output_dir / "scouting_report.json"
        generator.generate_json_report(report, json_path)
        print(f"JSON report: {json_path}")
    if not args.no_html:
        html_path = output_dir / "scouting_report.html"
        generator.generate_html_report(report, html_path)
        print(f"HTML report: {html_path}")
    return 0


def _add_scope_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--events',
        required=True,
        help='Path to a pitch events JSON file'
    )
    parser.add_argument(
        '--pitcher',
        help='Only include pitches by this pitcher ID'
    )
    parser.add_argument(
        '--game',
        help='Only include pitches from this game ID'
    )
    parser.add_argument(
        '--config',
        help='Threshold configuration YAML (default: built-in thresholds)'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pitchscout',
        description="Pitch scouting analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Situational tendencies for one pitcher
  pitchscout analyze --events pitches.json --pitcher p1

  # Fatigue check for one game
  pitchscout fatigue --events pitches.json --pitcher p1 --game g7

  # Coaching advice as JSON
  pitchscout advise --events pitches.json --pitcher p1 --json

  # JSON and HTML reports
  pitchscout report --events pitches.json --pitcher p1 --output reports/
        """
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Log debug output to the console'
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    for name, help_text in (
        ('analyze', 'Situational tendencies and predictions'),
        ('fatigue', 'Fatigue score and indicators'),
        ('advise', 'Coaching advice'),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        _add_scope_arguments(sub)
        sub.add_argument(
            '--json',
            action='store_true',
            help='Print the full result as JSON'
        )

    report_parser = subparsers.add_parser(
        'report',
        help='Write JSON and HTML scouting reports'
    )
    _add_scope_arguments(report_parser)
    report_parser.add_argument(
        '--output',
        default='reports',
        help='Output directory for reports (default: reports/)'
    )
    report_parser.add_argument(
        '--no-json',
        action='store_true',
        help='Skip JSON report generation'
    )
    report_parser.add_argument(
        '--no-html',
        action='store_true',
        help='Skip HTML report generation'
    )

    return parser


COMMANDS = {
    'analyze': analyze_command,
    'fatigue': fatigue_command,
    'advise': advise_command,
    'report': report_command,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    set_console_level("DEBUG" if args.verbose else "WARNING")

    try:
        return COMMANDS[args.command](args)
    except PitchScoutError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
