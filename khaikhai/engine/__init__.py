"""Preference inference and comparison scheduling engine."""

from .errors import InvalidInput
from .graph import PreferenceGraph
from .inference import can_infer, is_preferred
from .resolver import resolve
from .scheduler import ComparisonPair, QuicksortScheduler, TournamentScheduler
from .session import Progress, RankingResult, RankingSession, start_session

__all__ = [
    "InvalidInput",
    "PreferenceGraph",
    "can_infer",
    "is_preferred",
    "resolve",
    "ComparisonPair",
    "TournamentScheduler",
    "QuicksortScheduler",
    "Progress",
    "RankingResult",
    "RankingSession",
    "start_session",
]
