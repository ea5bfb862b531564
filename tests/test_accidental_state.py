"""
Tests for AccidentalState.
"""

import pytest

from scoreforge_keys.core.accidental_state import (
    AccidentalState,
    AccidentalVal,
    NUM_LINES,
)
from scoreforge_keys.core.key_event import KeySigEvent

# diatonic steps, C=0 .. B=6
C, D, E, F, G, A, B = range(7)


def _lines(step):
    return [line for line in range(step, NUM_LINES, 7)]


class TestInit:
    """Tests for presetting lines from a key signature."""

    def test_empty_state_is_natural(self):
        state = AccidentalState()
        assert len(state) == 74
        assert all(v is AccidentalVal.NATURAL for v in state)

    def test_c_major_all_natural(self):
        """No accidentals in the key means every line natural."""
        state = AccidentalState(KeySigEvent(0))
        assert all(v is AccidentalVal.NATURAL for v in state)

    def test_one_sharp(self):
        """G major raises F in every octave."""
        state = AccidentalState(KeySigEvent(1))
        assert state.sharps() == _lines(F)
        assert len(state.sharps()) == 11
        assert state.flats() == []

    def test_one_flat(self):
        """F major lowers B in every tracked octave."""
        state = AccidentalState(KeySigEvent(-1))
        assert state.flats() == _lines(B)
        assert state.sharps() == []
        for octave in range(10):
            flats = [line for line in state.flats() if octave * 7 <= line < octave * 7 + 7]
            assert flats == [octave * 7 + B]

    def test_top_octave_is_truncated(self):
        """Lines above 73 are not tracked; B of the last octave is dropped."""
        state = AccidentalState(KeySigEvent(-1))
        assert len(state.flats()) == 10
        assert max(state.flats()) == 69

    def test_two_sharps(self):
        """D major raises F and C."""
        state = AccidentalState(KeySigEvent(2))
        assert state.sharps() == sorted(_lines(F) + _lines(C))

    def test_three_flats(self):
        """Eb major lowers B, E and A."""
        state = AccidentalState(KeySigEvent(-3))
        assert state.flats() == sorted(_lines(B) + _lines(E) + _lines(A))

    def test_seven_sharps_all_lines(self):
        state = AccidentalState(KeySigEvent(7))
        assert all(v is AccidentalVal.SHARP for v in state)

    def test_seven_flats_all_lines(self):
        state = AccidentalState(KeySigEvent(-7))
        assert all(v is AccidentalVal.FLAT for v in state)

    def test_custom_key_not_expanded(self):
        """Custom signatures leave every line natural."""
        ev = KeySigEvent()
        ev.set_custom_type(0x1234)
        state = AccidentalState(ev)
        assert state.sharps() == [] and state.flats() == []

    def test_invalid_key_all_natural(self):
        state = AccidentalState(KeySigEvent())
        assert state == AccidentalState()

    def test_init_resets_previous_state(self):
        """Re-initializing discards accidentals from notes and old keys."""
        state = AccidentalState(KeySigEvent(3))
        state.set_accidental_val(1, AccidentalVal.FLAT)
        state.init(KeySigEvent(-2))
        assert state == AccidentalState(KeySigEvent(-2))

    def test_init_is_repeatable(self):
        ev = KeySigEvent(4)
        first = AccidentalState(ev)
        second = AccidentalState(ev)
        second.init(ev)
        assert first == second


class TestAccess:
    """Tests for per-line access."""

    def test_accidental_val(self):
        state = AccidentalState(KeySigEvent(1))
        assert state.accidental_val(F) is AccidentalVal.SHARP
        assert state[F + 7] is AccidentalVal.SHARP
        assert state.accidental_val(G) is AccidentalVal.NATURAL

    def test_set_accidental_val(self):
        state = AccidentalState(KeySigEvent(1))
        state.set_accidental_val(F, AccidentalVal.NATURAL)
        assert state.accidental_val(F) is AccidentalVal.NATURAL
        assert state.accidental_val(F + 7) is AccidentalVal.SHARP

    @pytest.mark.parametrize("line", [-1, 74, 100])
    def test_out_of_range_line(self, line):
        state = AccidentalState()
        with pytest.raises(IndexError):
            state.accidental_val(line)
        with pytest.raises(IndexError):
            state.set_accidental_val(line, AccidentalVal.SHARP)
