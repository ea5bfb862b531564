"""
Core module for ScoreForge Keys.

Contains the key signature model, key lists and transposition.
"""

from scoreforge_keys.core.key_event import KeySigEvent, KeyMode
from scoreforge_keys.core.key_list import KeyList
from scoreforge_keys.core.accidental_state import AccidentalState, AccidentalVal
from scoreforge_keys.core.timeline import Timeline
from scoreforge_keys.core.transpose import (
    Interval,
    transpose_key,
    transpose_key_event,
)
from scoreforge_keys.core.operations import (
    key_event_from_music21,
    key_event_to_music21,
    key_list_from_stream,
    transpose_key_list,
    read_key_list,
    write_key_list,
)

__all__ = [
    "KeySigEvent",
    "KeyMode",
    "KeyList",
    "AccidentalState",
    "AccidentalVal",
    "Timeline",
    "Interval",
    "transpose_key",
    "transpose_key_event",
    "key_event_from_music21",
    "key_event_to_music21",
    "key_list_from_stream",
    "transpose_key_list",
    "read_key_list",
    "write_key_list",
]
