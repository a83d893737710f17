"""Khai-Khai - Preference Ranking Game.

Ranks a set of named items from a sequence of pairwise choices.
"""

__version__ = "1.0.0"
