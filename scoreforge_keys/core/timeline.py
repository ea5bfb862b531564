"""
Timeline time base.

Files store ticks in their own division (ticks per quarter note); the
timeline converts them to its internal division when reading.
"""

from __future__ import annotations

from typing import Dict, Optional

from scoreforge_keys.core.key_list import KeyList


DEFAULT_DIVISION = 480


class Timeline:
    """
    Time base of a score plus its key lists.

    Args:
        division: Internal ticks per quarter note
        file_division: Ticks per quarter note of the file being read
    """

    def __init__(
        self,
        division: int = DEFAULT_DIVISION,
        file_division: Optional[int] = None
    ):
        if division <= 0:
            raise ValueError(f"Division must be positive, got {division}")
        self.division = division
        self.file_division_ticks = file_division or division
        if self.file_division_ticks <= 0:
            raise ValueError(f"File division must be positive, got {file_division}")
        self._keys: Dict[int, KeyList] = {}

    @classmethod
    def from_config(cls, config=None) -> "Timeline":
        """Create a timeline using the configured divisions."""
        if config is None:
            from scoreforge_keys.config import get_config
            config = get_config()
        return cls(config.timeline.division, config.timeline.file_division)

    def file_division(self, tick: int) -> int:
        """Convert a raw file tick to an internal tick, rounding to nearest."""
        return (tick * self.division + self.file_division_ticks // 2) // self.file_division_ticks

    def keys(self, staff: int = 0) -> KeyList:
        """Key list of a staff, created on first use."""
        if staff not in self._keys:
            self._keys[staff] = KeyList()
        return self._keys[staff]

    def __repr__(self) -> str:
        return f"Timeline(division={self.division}, file_division={self.file_division_ticks})"
