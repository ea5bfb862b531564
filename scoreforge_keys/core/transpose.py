"""
Key transposition.

Keys are transposed on the line of fifths rather than by adding to the
accidental count, so that the result is spelled the same way the pitch
spelling code would spell the tonic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from music21 import interval as m21interval

from scoreforge_keys.core.key_event import KeySigEvent
from scoreforge_keys.core.pitch_spelling import transpose_tpc


#                Cb Gb Db  Ab  Eb  Bb   F   C   G   D   A   E   B  F#  C#
#                -7 -6 -5  -4  -3  -2  -1   0   1   2   3   4   5   6   7
KEY_TO_TPC = (7, 8, 9, 10, 11, 12, 13, 14, 15, 16, 17, 18, 19, 20, 21)
TPC_TO_KEY = (-7, -6, -5, -4, -3, -2, -1, 0, 1, 2, 3, 4, 5, 6, 7)

TPC_KEY_MIN = 7
TPC_KEY_MAX = 21


@dataclass(frozen=True)
class Interval:
    """
    A transposition interval.

    Attributes:
        diatonic: Letter-name steps (P5 up = 4, M2 down = -1)
        chromatic: Semitones (P5 up = 7, M2 down = -2)
    """

    diatonic: int = 0
    chromatic: int = 0

    @classmethod
    def from_music21(cls, m21: m21interval.Interval) -> "Interval":
        """Build from a music21 Interval."""
        generic = m21.generic.directed
        diatonic = generic - 1 if generic > 0 else generic + 1
        return cls(diatonic=diatonic, chromatic=m21.semitones)

    @classmethod
    def from_name(cls, name: str) -> "Interval":
        """
        Build from an interval name.

        Args:
            name: Name like "P5", "m3", "-M2"
        """
        return cls.from_music21(m21interval.Interval(name))

    @classmethod
    def from_semitones(cls, semitones: int) -> "Interval":
        """Build from a semitone count, letting music21 pick the spelling."""
        return cls.from_music21(m21interval.Interval(semitones))

    def is_zero(self) -> bool:
        return self.diatonic == 0 and self.chromatic == 0

    def to_music21(self) -> m21interval.Interval:
        """Convert to a music21 Interval."""
        generic = self.diatonic + 1 if self.diatonic >= 0 else self.diatonic - 1
        return m21interval.intervalFromGenericAndChromatic(generic, self.chromatic)


IntervalLike = Union[Interval, str, int, m21interval.Interval]


def as_interval(value: IntervalLike) -> Interval:
    """Coerce an interval name, semitone count or music21 interval."""
    if isinstance(value, Interval):
        return value
    if isinstance(value, m21interval.Interval):
        return Interval.from_music21(value)
    if isinstance(value, bool):
        raise TypeError(f"Not an interval: {value!r}")
    if isinstance(value, int):
        return Interval.from_semitones(value)
    if isinstance(value, str):
        return Interval.from_name(value)
    raise TypeError(f"Not an interval: {value!r}")


def transpose_key(key: int, interval: IntervalLike) -> int:
    """
    Transpose a key signature.

    Args:
        key: Accidental count, -7 (Cb) .. 7 (C#). Must already be within
            range; KeySigEvent guarantees this.
        interval: Transposition interval

    Returns:
        New accidental count. A result that would need more than seven
        sharps or flats is respelled (G# major becomes Ab major).
    """
    if not -7 <= key <= 7:
        raise IndexError(f"Key out of range: {key}")
    tpc = KEY_TO_TPC[key + 7]
    tpc = transpose_tpc(tpc, as_interval(interval), False)
    if tpc > TPC_KEY_MAX:
        tpc -= 12
    elif tpc < TPC_KEY_MIN:
        tpc += 12
    return TPC_TO_KEY[tpc - 7]


def transpose_key_event(event: KeySigEvent, interval: IntervalLike) -> KeySigEvent:
    """
    Return a transposed copy of a key signature event.

    Custom and invalid events have no accidental count to transpose and
    are returned as plain copies.
    """
    result = event.copy()
    if event.is_valid and not event.custom:
        result.set_accidental_type(transpose_key(event.accidental_type, interval))
    return result
