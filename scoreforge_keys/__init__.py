"""
ScoreForge Keys - Key signature timeline for ScoreForge

Models key signatures along a score's timeline: the key signature
value itself, key changes by tick, transposition on the circle of
fifths and the accidental state a key implies for each staff line.
"""

__version__ = "1.0.0"

from scoreforge_keys.core.key_event import KeySigEvent
from scoreforge_keys.core.key_list import KeyList
from scoreforge_keys.config import Config

__all__ = ["KeySigEvent", "KeyList", "Config", "__version__"]
