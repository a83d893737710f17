"""Khai-Khai CLI - Preference Ranking Game.

Collects the items to rank, asks the user a series of "which do you
prefer?" questions, and prints the resulting ranking.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console

from . import __version__
from .config import Preset, Settings, Strategy, load_settings
from .engine.errors import InvalidInput
from .engine.session import RankingResult, RankingSession, start_session
from .items import ItemSetBuilder, parse_item_count, split_items
from .output.terminal import TerminalOutput

_PRESET_NAMES = [p.value for p in Preset]
_STRATEGY_NAMES = [s.value for s in Strategy]


def configure_logging(verbose: bool) -> None:
    """Send engine logs to stderr; DEBUG when verbose, warnings otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s [%(name)s] %(message)s",
    )


def build_item_set(
    ui: TerminalOutput,
    settings: Settings,
    names: list[str],
    import_text: str | None,
    count_arg: str | None,
) -> list[str]:
    """Collect and finalize the item set.

    Items given on the command line are taken as-is and must match the
    count. When none are given, the user is prompted for each name and
    re-prompted on invalid input.

    Args:
        ui: Terminal front end used for prompts
        settings: Active settings
        names: Items given as positional arguments
        import_text: Comma-separated items from ``--import``
        count_arg: Raw ``--count`` value

    Returns:
        Finalized list of unique items

    Raises:
        InvalidInput: If command-line items or count are invalid
    """
    imported = split_items(import_text) if import_text else []
    supplied = bool(names or imported)

    if count_arg is not None:
        item_count = parse_item_count(count_arg, settings)
    elif supplied:
        item_count = parse_item_count(str(len(names) + len(imported)), settings)
    else:
        while True:
            try:
                item_count = parse_item_count(ui.ask_count(), settings)
                break
            except InvalidInput as e:
                ui.print_error(str(e))

    builder = ItemSetBuilder(item_count, settings)
    if builder.advisory:
        ui.print_advisory(builder.advisory)

    if supplied:
        if import_text:
            builder.import_text(import_text)
        for name in names:
            builder.add(name)
        return builder.finalize()

    while not builder.is_full:
        try:
            builder.add(ui.ask_item(len(builder.items) + 1, item_count))
        except InvalidInput as e:
            ui.print_error(str(e))
    return builder.finalize()


def run_session(ui: TerminalOutput, session: RankingSession) -> None:
    """Ask comparisons until the session runs out of pairs."""
    pair = session.next_comparison()
    while pair is not None:
        chosen = ui.ask_preference(pair, session.progress)
        session.answer(chosen)
        pair = session.next_comparison()


def write_result(
    ui: TerminalOutput,
    result: RankingResult,
    output_format: str,
    output_path: Path | None = None,
) -> None:
    """Render a finished ranking in the requested format."""
    if output_format == 'terminal':
        ui.print_ranking(result)
        ui.print_summary(result)
        return

    if output_format == 'markdown':
        from .output.markdown import MarkdownOutput
        content = MarkdownOutput().generate(result)
    else:
        from .output.json_out import JSONOutput
        content = JSONOutput().to_json(result)

    if output_path:
        output_path.write_text(content, encoding='utf-8')
        print(f"Report saved to: {output_path}", file=sys.stderr)
    else:
        print(content)


def main(args: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog='khaikhai',
        description='Preference Ranking Game - Rank items by answering "which do you prefer?"',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  khaikhai                                         # prompt for count and items
  khaikhai Tea Coffee Juice
  khaikhai --import "Apple, Banana, Cherry, Mango"
  khaikhai --count 12 --preset quick
  khaikhai Tea Coffee Juice --format json --output ranking.json
  khaikhai Tea Coffee Juice --play-again
        """
    )

    parser.add_argument(
        'items',
        nargs='*',
        metavar='ITEM',
        help='Items to rank (omit to enter them interactively)'
    )

    parser.add_argument(
        '-n', '--count',
        metavar='N',
        help='Number of items to rank; given items must match it'
    )

    parser.add_argument(
        '-i', '--import',
        dest='import_text',
        metavar='TEXT',
        help='Comma-separated list of items, e.g. "Apple, Banana, Cherry"'
    )

    parser.add_argument(
        '-p', '--preset',
        choices=_PRESET_NAMES,
        default='default',
        help='Settings preset (default: default)'
    )

    parser.add_argument(
        '-s', '--strategy',
        choices=_STRATEGY_NAMES,
        help='Comparison strategy (default: from preset; auto picks by item count)'
    )

    parser.add_argument(
        '--tournament-max',
        metavar='N',
        type=int,
        help='Largest item count ranked by full tournament when strategy is auto'
    )

    parser.add_argument(
        '--play-again',
        action='store_true',
        help='After each ranking, offer to rank the same items again'
    )

    parser.add_argument(
        '-f', '--format',
        choices=['terminal', 'markdown', 'json'],
        default='terminal',
        help='Output format (default: terminal)'
    )

    parser.add_argument(
        '-o', '--output',
        type=Path,
        help='Output file for markdown/json (default: stdout)'
    )

    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable colored output'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parsed_args = parser.parse_args(args)
    configure_logging(parsed_args.verbose)

    try:
        settings = load_settings(
            parsed_args.preset,
            strategy=parsed_args.strategy,
            tournament_max_items=parsed_args.tournament_max,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Keep stdout clean for machine-readable formats
    if parsed_args.format == 'terminal':
        ui = TerminalOutput(no_color=parsed_args.no_color)
    else:
        ui = TerminalOutput(console=Console(stderr=True, no_color=parsed_args.no_color, highlight=False))

    try:
        try:
            items = build_item_set(
                ui,
                settings,
                parsed_args.items,
                parsed_args.import_text,
                parsed_args.count,
            )
            session = start_session(items, settings)
        except InvalidInput as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        if parsed_args.verbose:
            print(f"Ranking {len(items)} items with {session.strategy.value} strategy",
                  file=sys.stderr)

        while True:
            ui.print_header(items, session.strategy, session.progress)
            run_session(ui, session)
            result = session.result()

            if parsed_args.verbose:
                print(f"Asked {result.questions_asked} questions, "
                      f"{result.progress.completed - result.questions_asked} inferred",
                      file=sys.stderr)

            write_result(ui, result, parsed_args.format, parsed_args.output)

            if not (parsed_args.play_again and ui.ask_play_again()):
                return 0
            session.reset()

    except (KeyboardInterrupt, EOFError):
        print("\nInterrupted", file=sys.stderr)
        return 130
    except (MemoryError, RecursionError):
        raise
    except Exception as e:
        print(f"Error ({type(e).__name__}): {e}", file=sys.stderr)
        if parsed_args.verbose:
            import traceback
            traceback.print_exc()
        else:
            print("Use --verbose for full traceback", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
