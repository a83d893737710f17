"""Rich terminal output for ranking sessions.

Provides the interactive comparison prompt and the formatted result using
the Rich library.
Theme: Catppuccin Mocha (https://catppuccin.com/palette/)
"""

from __future__ import annotations

from rich.align import Align
from rich.box import ROUNDED
from rich.console import Console, Group, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.rule import Rule
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from .. import __version__
from ..config import Strategy
from ..engine.scheduler import ComparisonPair
from ..engine.session import Progress, RankingResult

# Catppuccin Mocha palette
MOCHA = {
    "mauve": "#cba6f7",
    "red": "#f38ba8",
    "peach": "#fab387",
    "yellow": "#f9e2af",
    "green": "#a6e3a1",
    "sapphire": "#74c7ec",
    "blue": "#89b4fa",
    "lavender": "#b4befe",
    "text": "#cdd6f4",
    "subtext0": "#a6adc8",
    "overlay1": "#7f849c",
    "surface2": "#585b70",
    "surface0": "#313244",
    "crust": "#11111b",
}

# Rich theme for markup tags
MOCHA_THEME = Theme({
    "info": MOCHA["sapphire"],
    "warning": MOCHA["peach"],
    "danger": MOCHA["red"],
    "success": MOCHA["green"],
})

STRATEGY_LABELS = {
    Strategy.TOURNAMENT: "Tournament (every pair)",
    Strategy.QUICKSORT: "Quicksort (pivot batches)",
}

# Podium colors for the top three places
PLACE_COLORS = {
    1: MOCHA["yellow"],
    2: MOCHA["lavender"],
    3: MOCHA["peach"],
}


# ── Badge / display helpers ──────────────────────────────────────────────


def _rank_badge(place: int) -> Text:
    """Render a place number as a compact colored pill: e.g. `` 1 ``."""
    color = PLACE_COLORS.get(place, MOCHA["blue"])
    badge = Text()
    badge.append(f" {place} ", style=f"bold {MOCHA['crust']} on {color}")
    return badge


def _progress_bar(percentage: int, width: int = 30) -> Text:
    """Build a progress bar for a 0-100 percentage.

    Returns a Rich Text object like: ██████████░░░░░░░░░░ 50%
    """
    percentage = max(0, min(100, percentage))
    filled = int(round(percentage / 100 * width))
    empty = width - filled

    bar = Text()
    bar.append("█" * filled, style=MOCHA["blue"])
    bar.append("░" * empty, style=MOCHA["surface2"])
    bar.append(f" {percentage}%", style=f"bold {MOCHA['blue']}")
    return bar


# ── Main output class ────────────────────────────────────────────────────


class TerminalOutput:
    """Rich terminal front end for a ranking session."""

    def __init__(
        self,
        console: Console | None = None,
        no_color: bool = False,
    ):
        """Initialize terminal output.

        Args:
            console: Optional Rich console instance
            no_color: If True, disable colored output
        """
        if console:
            self.console = console
        elif no_color:
            self.console = Console(no_color=True, highlight=False)
        else:
            self.console = Console(theme=MOCHA_THEME)

    # ── Public API ────────────────────────────────────────────────────

    def print_header(
        self,
        items: list[str] | None = None,
        strategy: Strategy | None = None,
        progress: Progress | None = None,
    ) -> None:
        """Print the banner and session information panel.

        Args:
            items: Session items
            strategy: Scheduling strategy in use
            progress: Initial progress, for the expected comparison count
        """
        self.console.print()
        self.console.print(
            Panel(
                Align.center(
                    Text(
                        "KHAI-KHAI - Preference Ranking Game",
                        style=f"bold {MOCHA['mauve']}",
                    )
                ),
                box=ROUNDED,
                border_style=MOCHA["mauve"],
                padding=(0, 1),
            )
        )

        if not items:
            return

        info_table = Table(show_header=False, box=None, padding=(0, 2), show_edge=False)
        info_table.add_column("Key", style=MOCHA["subtext0"], min_width=12)
        info_table.add_column("Value", style=f"bold {MOCHA['text']}")

        info_table.add_row("Items:", str(len(items)))
        if strategy is not None:
            info_table.add_row("Strategy:", STRATEGY_LABELS.get(strategy, strategy.value))
        if progress is not None:
            estimate = "exact" if strategy is Strategy.TOURNAMENT else "estimated"
            info_table.add_row("Comparisons:", f"{progress.total} ({estimate})")

        self.console.print()
        self.console.print(
            Panel(
                info_table,
                title=f"[bold {MOCHA['sapphire']}]SESSION[/bold {MOCHA['sapphire']}]",
                title_align="left",
                box=ROUNDED,
                border_style=MOCHA["surface2"],
                padding=(0, 1),
            )
        )

    def print_advisory(self, message: str) -> None:
        """Print a non-fatal usability warning."""
        self.console.print(f"[bold {MOCHA['peach']}]Warning:[/bold {MOCHA['peach']}] {escape(message)}")

    def print_error(self, message: str) -> None:
        """Print a recoverable input error before re-prompting."""
        self.console.print(f"[bold {MOCHA['red']}]Error:[/bold {MOCHA['red']}] {escape(message)}")

    def print_progress(self, progress: Progress) -> None:
        """Print the progress bar with the completed/total counter."""
        line = _progress_bar(progress.percentage)
        line.append(
            f"  {progress.completed} / {progress.total} comparisons",
            style=MOCHA["overlay1"],
        )
        self.console.print(line)

    def ask_count(self, default: int = 4) -> str:
        """Prompt for how many items the user wants to rank."""
        return Prompt.ask(
            f"[{MOCHA['sapphire']}]How many items do you want to rank?[/{MOCHA['sapphire']}]",
            default=str(default),
            console=self.console,
        )

    def ask_item(self, number: int, total: int) -> str:
        """Prompt for one item name."""
        return Prompt.ask(
            f"[{MOCHA['sapphire']}]Item {number}/{total}[/{MOCHA['sapphire']}]",
            console=self.console,
        )

    def ask_preference(self, pair: ComparisonPair, progress: Progress) -> str:
        """Show a pair and ask which item the user prefers.

        Args:
            pair: Items to compare
            progress: Current progress, shown above the question

        Returns:
            The chosen item
        """
        self.console.print()
        self.print_progress(progress)

        choices = Table(show_header=False, box=None, padding=(0, 1), show_edge=False)
        choices.add_column("Key", justify="right")
        choices.add_column("Item")
        choices.add_row(Text(" 1 ", style=f"bold {MOCHA['crust']} on {MOCHA['green']}"),
                        Text(pair.first, style=f"bold {MOCHA['text']}"))
        choices.add_row(Text("OR", style=f"bold {MOCHA['overlay1']}"), Text(""))
        choices.add_row(Text(" 2 ", style=f"bold {MOCHA['crust']} on {MOCHA['green']}"),
                        Text(pair.second, style=f"bold {MOCHA['text']}"))
        self.console.print(
            Panel(
                choices,
                title=f"[bold {MOCHA['lavender']}]Which do you prefer?[/bold {MOCHA['lavender']}]",
                title_align="left",
                box=ROUNDED,
                border_style=MOCHA["lavender"],
                padding=(0, 1),
            )
        )

        choice = Prompt.ask("Choice", choices=["1", "2"], console=self.console)
        return pair.first if choice == "1" else pair.second

    def ask_play_again(self) -> bool:
        """Ask whether to rank the same items again from scratch."""
        return Confirm.ask(
            f"[{MOCHA['sapphire']}]Play again with the same items?[/{MOCHA['sapphire']}]",
            default=False,
            console=self.console,
        )

    def print_ranking(self, result: RankingResult) -> None:
        """Print the ranking table, plus any items a contradiction left out.

        Args:
            result: Finished session result
        """
        table = Table(
            box=ROUNDED,
            show_header=True,
            header_style=f"bold {MOCHA['sapphire']}",
            border_style=MOCHA["surface2"],
            padding=(0, 1),
        )
        table.add_column("#", justify="right")
        table.add_column("Item", style=f"bold {MOCHA['text']}")

        for place, item in enumerate(result.ranking, 1):
            table.add_row(_rank_badge(place), Text(item))

        parts: list[RenderableType] = [table]

        if not result.is_complete:
            note = Text()
            note.append("Partial ranking: ", style=f"bold {MOCHA['peach']}")
            note.append(
                "some answers contradicted each other, so these items could not be placed:\n",
                style=MOCHA["subtext0"],
            )
            note.append(", ".join(result.unranked), style=f"bold {MOCHA['text']}")
            parts.append(Text(""))
            parts.append(note)

        self.console.print()
        self.console.print(
            Panel(
                Group(*parts),
                title=(
                    f"[bold {MOCHA['lavender']}]"
                    "YOUR PREFERENCE RANKING"
                    f"[/bold {MOCHA['lavender']}]"
                ),
                title_align="left",
                box=ROUNDED,
                border_style=MOCHA["lavender"],
                padding=(0, 1),
            )
        )

    def print_summary(self, result: RankingResult) -> None:
        """Print the footer line with session statistics."""
        self.console.print()
        footer_parts = [f"khaikhai v{__version__}"]
        footer_parts.append(f"Strategy: {result.strategy.value}")
        footer_parts.append(f"{result.questions_asked} questions")
        footer_parts.append(f"{result.progress.completed - result.questions_asked} inferred")
        footer_parts.append("complete" if result.is_complete else "partial")
        footer_text = f"[{MOCHA['overlay1']}]{' | '.join(footer_parts)}[/{MOCHA['overlay1']}]"

        self.console.print(Rule(style=MOCHA["surface2"]))
        self.console.print(Align.center(Text.from_markup(footer_text)))
        self.console.print()


def print_results(
    result: RankingResult,
    no_color: bool = False,
    console: Console | None = None,
) -> None:
    """Convenience function to print a finished ranking.

    Args:
        result: Finished session result
        no_color: If True, disable colored output
        console: Optional Rich console instance
    """
    output = TerminalOutput(console=console, no_color=no_color)
    output.print_header(result.items, result.strategy, result.progress)
    output.print_ranking(result)
    output.print_summary(result)
