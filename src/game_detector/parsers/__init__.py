"""Parsers for launcher file formats."""

from game_detector.parsers.keyvalues import KeyValues, dumps, load, loads

__all__ = ["KeyValues", "dumps", "load", "loads"]
