"""Engine and host settings.

Settings are grouped into named presets; command-line flags override
individual fields of the selected preset.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class Strategy(Enum):
    """How the scheduler chooses which pairs to ask about."""
    AUTO = "auto"                # Pick by item count
    TOURNAMENT = "tournament"    # Every pair, n*(n-1)/2 questions at most
    QUICKSORT = "quicksort"      # Pivot batches, about n*log2(n) questions


class Preset(Enum):
    """Predefined settings for different play styles."""
    DEFAULT = "default"      # Tournament for small sets, quicksort above
    THOROUGH = "thorough"    # Always ask about every undetermined pair
    QUICK = "quick"          # Always use pivot batches


@dataclass(frozen=True)
class Settings:
    """Tunable limits for a ranking session."""
    tournament_max_items: int = 10   # Largest set ranked by full tournament
    triangulation_batch: int = 3     # Max pairs per adaptive follow-up batch
    large_count_warning: int = 50    # Above this, warn about question count
    min_items: int = 2
    max_items: int = 99
    strategy: Strategy = Strategy.AUTO

    def __post_init__(self):
        if self.min_items < 2:
            raise ValueError("min_items must be at least 2")
        if self.max_items < self.min_items:
            raise ValueError("max_items must not be smaller than min_items")
        if self.triangulation_batch < 1:
            raise ValueError("triangulation_batch must be at least 1")

    def select_strategy(self, item_count: int) -> Strategy:
        """Resolve ``AUTO`` to a concrete strategy for ``item_count`` items."""
        if self.strategy is not Strategy.AUTO:
            return self.strategy
        if item_count > self.tournament_max_items:
            return Strategy.QUICKSORT
        return Strategy.TOURNAMENT


SETTINGS_PRESETS: dict[Preset, Settings] = {
    Preset.DEFAULT: Settings(),
    Preset.THOROUGH: Settings(strategy=Strategy.TOURNAMENT),
    Preset.QUICK: Settings(strategy=Strategy.QUICKSORT),
}


def load_settings(
    preset: Preset | str = Preset.DEFAULT,
    **overrides,
) -> Settings:
    """Build settings from a preset plus explicit overrides.

    Args:
        preset: Preset enum member or its string value
        **overrides: Settings fields to replace; ``None`` values are ignored

    Returns:
        Resolved settings
    """
    if isinstance(preset, str):
        preset = Preset(preset.lower())

    base = SETTINGS_PRESETS[preset]
    changes = {k: v for k, v in overrides.items() if v is not None}
    if isinstance(changes.get("strategy"), str):
        changes["strategy"] = Strategy(changes["strategy"].lower())
    return replace(base, **changes) if changes else base
