"""
Accidental state of staff lines under a key signature.

Lines are diatonic positions counted from the lowest C: line = octave * 7
+ step. Eleven octaves would give 77 lines but only the first 74 are
tracked; positions above that are simply not modeled.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterator, List, Optional

from scoreforge_keys.core.key_event import KeySigEvent
from scoreforge_keys.core.pitch_spelling import tpc2step


NUM_LINES = 74
NUM_OCTAVES = 11

# First sharp (F#) and first flat (Bb) on the line of fifths.
_SHARP_BASE_TPC = 20
_FLAT_BASE_TPC = 12


class AccidentalVal(IntEnum):
    """Alteration implied for a line."""
    FLAT = -1
    NATURAL = 0
    SHARP = 1


class AccidentalState:
    """
    Per-line accidental state derived from a key signature.

    Custom key signatures are not expanded: they leave every line
    natural, as do invalid events.
    """

    def __init__(self, event: Optional[KeySigEvent] = None):
        self._state: List[AccidentalVal] = [AccidentalVal.NATURAL] * NUM_LINES
        if event is not None:
            self.init(event)

    def init(self, event: KeySigEvent) -> None:
        """Reset all lines and preset them with the accidentals of a key."""
        self._state = [AccidentalVal.NATURAL] * NUM_LINES
        key_type = event.accidental_type

        for octave in range(NUM_OCTAVES):
            if key_type > 0:
                for i in range(key_type):
                    self._mark(tpc2step(_SHARP_BASE_TPC + i) + octave * 7, AccidentalVal.SHARP)
            else:
                for i in range(0, key_type, -1):
                    self._mark(tpc2step(_FLAT_BASE_TPC + i) + octave * 7, AccidentalVal.FLAT)

    def _mark(self, line: int, val: AccidentalVal) -> None:
        # the top octave is only partially tracked
        if line < NUM_LINES:
            self._state[line] = val

    def accidental_val(self, line: int) -> AccidentalVal:
        """Accidental implied at a line."""
        self._check_line(line)
        return self._state[line]

    def set_accidental_val(self, line: int, val: AccidentalVal) -> None:
        """Record an accidental, e.g. one set by a note earlier in the measure."""
        self._check_line(line)
        self._state[line] = AccidentalVal(val)

    def sharps(self) -> List[int]:
        """Lines currently marked sharp."""
        return [i for i, v in enumerate(self._state) if v is AccidentalVal.SHARP]

    def flats(self) -> List[int]:
        """Lines currently marked flat."""
        return [i for i, v in enumerate(self._state) if v is AccidentalVal.FLAT]

    @staticmethod
    def _check_line(line: int) -> None:
        if not 0 <= line < NUM_LINES:
            raise IndexError(f"Line {line} outside 0..{NUM_LINES - 1}")

    def __getitem__(self, line: int) -> AccidentalVal:
        return self.accidental_val(line)

    def __len__(self) -> int:
        return NUM_LINES

    def __iter__(self) -> Iterator[AccidentalVal]:
        return iter(self._state)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccidentalState):
            return NotImplemented
        return self._state == other._state

    def __repr__(self) -> str:
        return f"AccidentalState(sharps={self.sharps()}, flats={self.flats()})"
