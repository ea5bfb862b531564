"""
Key signature events.

A KeySigEvent is the key signature in effect from some point of the
timeline onwards. It is either unset (no key established yet), a
standard signature counted in sharps (positive) or flats (negative),
or a custom accidental pattern.
"""

from __future__ import annotations

import copy
import logging
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


KEY_MIN = -7
KEY_MAX = 7
CUSTOM_TYPE_MASK = 0xFFFF

# Legacy packed subtype, least significant bit first:
#   accidental type 4 bits signed, natural type 4 bits signed,
#   custom type 16 bits unsigned, custom flag 1 bit, invalid flag 1 bit
_ACCIDENTAL_SHIFT = 0
_NATURAL_SHIFT = 4
_CUSTOM_TYPE_SHIFT = 8
_CUSTOM_FLAG_SHIFT = 24
_INVALID_FLAG_SHIFT = 25


class KeyMode(Enum):
    """Which payload of a KeySigEvent is authoritative."""
    INVALID = "invalid"
    STANDARD = "standard"
    CUSTOM = "custom"


def _signed4(value: int) -> int:
    """Sign-extend the low four bits."""
    value &= 0xF
    return value - 0x10 if value & 0x8 else value


class KeySigEvent:
    """
    Key signature in effect starting at some tick.

    The mode decides which payload counts: the accidental count for
    STANDARD, the custom pattern for CUSTOM, nothing for INVALID. The
    natural type (naturals to show when cancelling a previous key) is
    carried alongside and is not part of the identity of the key.
    """

    __slots__ = ("_mode", "_accidental_type", "_natural_type", "_custom_type", "_custom_flag")

    def __init__(self, accidental_type: Optional[int] = None):
        """
        Create a key signature event.

        Args:
            accidental_type: Sharps (positive) or flats (negative). If
                omitted the event is invalid, i.e. no key established.
        """
        self._mode = KeyMode.INVALID
        self._accidental_type = 0
        self._natural_type = 0
        self._custom_type = 0
        self._custom_flag = False
        if accidental_type is not None:
            self._mode = KeyMode.STANDARD
            self._accidental_type = int(accidental_type)
            self.enforce_limits()

    @classmethod
    def from_subtype(cls, subtype: int) -> "KeySigEvent":
        """Decode a legacy packed subtype into a new event."""
        event = cls()
        event.init_from_subtype(subtype)
        return event

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def mode(self) -> KeyMode:
        return self._mode

    @property
    def invalid(self) -> bool:
        return self._mode is KeyMode.INVALID

    @property
    def is_valid(self) -> bool:
        return self._mode is not KeyMode.INVALID

    @property
    def custom(self) -> bool:
        return self._mode is KeyMode.CUSTOM

    @property
    def accidental_type(self) -> int:
        """Sharps/flats count; 0 unless the event is a standard signature."""
        return self._accidental_type if self._mode is KeyMode.STANDARD else 0

    @property
    def custom_type(self) -> int:
        """Custom pattern; 0 unless the event is a custom signature."""
        return self._custom_type if self._mode is KeyMode.CUSTOM else 0

    @property
    def natural_type(self) -> int:
        return self._natural_type

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set_accidental_type(self, value: int) -> None:
        """Switch to a standard signature with the given count."""
        self._mode = KeyMode.STANDARD
        self._accidental_type = int(value)
        self._custom_type = 0
        self._custom_flag = False
        self.enforce_limits()

    def set_custom_type(self, value: int) -> None:
        """Switch to a custom signature. The pattern is kept to 16 bits."""
        self._mode = KeyMode.CUSTOM
        self._accidental_type = 0
        self._custom_type = int(value) & CUSTOM_TYPE_MASK
        self._custom_flag = True

    def set_natural_type(self, value: int) -> None:
        self._natural_type = int(value)
        self.enforce_limits()

    def enforce_limits(self) -> None:
        """Clamp accidental and natural type to -7 .. 7."""
        msg = None
        if self._accidental_type < KEY_MIN:
            self._accidental_type = KEY_MIN
            msg = "accidentalType < -7"
        elif self._accidental_type > KEY_MAX:
            self._accidental_type = KEY_MAX
            msg = "accidentalType > 7"
        if self._natural_type < KEY_MIN:
            self._natural_type = KEY_MIN
            msg = "naturalType < -7"
        elif self._natural_type > KEY_MAX:
            self._natural_type = KEY_MAX
            msg = "naturalType > 7"
        if msg:
            logger.debug(f"KeySigEvent: {msg}")

    # ------------------------------------------------------------------
    # Legacy subtype
    # ------------------------------------------------------------------

    def init_from_subtype(self, subtype: int) -> None:
        """
        Initialize from a packed subtype written by old file versions.

        The invalid flag takes precedence over the custom flag. Payloads
        of the inactive mode are kept as they were packed, hidden behind
        the mode-gated accessors, so that subtype() writes them back.
        """
        accidental = _signed4(subtype >> _ACCIDENTAL_SHIFT)
        natural = _signed4(subtype >> _NATURAL_SHIFT)
        custom_type = (subtype >> _CUSTOM_TYPE_SHIFT) & CUSTOM_TYPE_MASK
        is_custom = bool((subtype >> _CUSTOM_FLAG_SHIFT) & 1)
        is_invalid = bool((subtype >> _INVALID_FLAG_SHIFT) & 1)

        if is_invalid:
            self._mode = KeyMode.INVALID
        elif is_custom:
            self._mode = KeyMode.CUSTOM
        else:
            self._mode = KeyMode.STANDARD
        self._accidental_type = accidental
        self._natural_type = natural
        self._custom_type = custom_type
        self._custom_flag = is_custom
        self.enforce_limits()

    def subtype(self) -> int:
        """Encode into the legacy packed layout."""
        value = (self._accidental_type & 0xF) << _ACCIDENTAL_SHIFT
        value |= (self._natural_type & 0xF) << _NATURAL_SHIFT
        value |= (self._custom_type & CUSTOM_TYPE_MASK) << _CUSTOM_TYPE_SHIFT
        if self.custom or (self.invalid and self._custom_flag):
            value |= 1 << _CUSTOM_FLAG_SHIFT
        if self.invalid:
            value |= 1 << _INVALID_FLAG_SHIFT
        return value

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def copy(self) -> "KeySigEvent":
        return copy.copy(self)

    def __copy__(self) -> "KeySigEvent":
        other = KeySigEvent.__new__(KeySigEvent)
        other._mode = self._mode
        other._accidental_type = self._accidental_type
        other._natural_type = self._natural_type
        other._custom_type = self._custom_type
        other._custom_flag = self._custom_flag
        return other

    def _identity(self) -> tuple:
        # natural_type is not part of the identity of a key
        if self._mode is KeyMode.CUSTOM:
            return (self._mode, self._custom_type)
        if self._mode is KeyMode.STANDARD:
            return (self._mode, self._accidental_type)
        return (self._mode,)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeySigEvent):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        """
        Hash of the key identity, consistent with ==.

        Events are mutable and the hash follows the setters, so an event
        must not be changed while it is a set member or dict key. Store a
        copy() where that matters, as KeyList does.
        """
        return hash(self._identity())

    def __repr__(self) -> str:
        if self.invalid:
            return "<KeySigEvent: invalid>"
        if self.custom:
            return f"<KeySigEvent: nat {self._natural_type} custom {self._custom_type}>"
        return f"<KeySigEvent: nat {self._natural_type} accidental {self._accidental_type}>"
