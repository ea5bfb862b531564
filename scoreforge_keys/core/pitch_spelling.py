"""
Tonal pitch classes (tpc).

A tpc is a position on the line of fifths: Fbb = -1, C = 14, B## = 33.
Unlike a MIDI pitch class it keeps the spelling, so F# (20) and Gb (8)
are different values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from music21 import pitch

if TYPE_CHECKING:
    from scoreforge_keys.core.transpose import Interval


TPC_MIN = -1
TPC_MAX = 33

# Naturals on the line of fifths, F C G D A E B.
_FIFTHS_STEPS = "FCGDAEB"
_STEP_NAMES = "CDEFGAB"
_STEP_PITCHES = (0, 2, 4, 5, 7, 9, 11)


def _check_tpc(tpc: int) -> None:
    if not TPC_MIN <= tpc <= TPC_MAX:
        raise ValueError(f"Invalid tpc: {tpc}")


def tpc2step(tpc: int) -> int:
    """Diatonic step of a tpc, C=0 .. B=6."""
    _check_tpc(tpc)
    return _STEP_NAMES.index(_FIFTHS_STEPS[(tpc + 1) % 7])


def tpc2alter(tpc: int) -> int:
    """Alteration in semitones, -2 (double flat) .. 2 (double sharp)."""
    _check_tpc(tpc)
    return (tpc + 1) // 7 - 2


def step2tpc(step: int, alter: int = 0) -> int:
    """Inverse of tpc2step/tpc2alter."""
    if not 0 <= step <= 6:
        raise ValueError(f"Invalid step: {step}")
    if not -2 <= alter <= 2:
        raise ValueError(f"Invalid alteration: {alter}")
    natural = _FIFTHS_STEPS.index(_STEP_NAMES[step]) - 1
    return natural + 7 * (alter + 2)


def tpc2pitch(tpc: int) -> int:
    """Sounding pitch class 0..11."""
    return (_STEP_PITCHES[tpc2step(tpc)] + tpc2alter(tpc)) % 12


def tpc2name(tpc: int) -> str:
    """Readable name like "F#" or "Bb"."""
    alter = tpc2alter(tpc)
    step = _STEP_NAMES[tpc2step(tpc)]
    return step + ("#" * alter if alter > 0 else "b" * -alter)


def tpc_to_music21(tpc: int) -> pitch.Pitch:
    """Octave-less music21 Pitch for a tpc."""
    alter = tpc2alter(tpc)
    name = _STEP_NAMES[tpc2step(tpc)]
    if alter > 0:
        name += "#" * alter
    elif alter < 0:
        name += "-" * -alter
    return pitch.Pitch(name)


def tpc_from_music21(p: pitch.Pitch) -> int:
    """tpc of a music21 Pitch. Microtonal alterations are rejected."""
    alter = p.alter
    if alter != int(alter):
        raise ValueError(f"Microtonal pitch has no tpc: {p.name}")
    return step2tpc(_STEP_NAMES.index(p.step), int(alter))


def transpose_tpc(
    tpc: int,
    interval: "Interval",
    use_double_sharps_flats: bool = False
) -> int:
    """
    Transpose a tpc by an interval, keeping the spelling.

    Args:
        tpc: Tonal pitch class to transpose
        interval: Diatonic/chromatic interval
        use_double_sharps_flats: If False, results with a double
            accidental are respelled enharmonically (F## -> G)

    Returns:
        Transposed tpc
    """
    _check_tpc(tpc)
    if interval.is_zero():
        return tpc

    p = tpc_to_music21(tpc).transpose(interval.to_music21())
    if not use_double_sharps_flats:
        while abs(p.alter) > 1:
            p = p.getEnharmonic()
    return tpc_from_music21(p)
