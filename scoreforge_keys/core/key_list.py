"""
KeyList - key signature changes along the timeline.

Maps ticks to KeySigEvents. The key in effect at any tick is the event
at the greatest stored tick not after it.
"""

from __future__ import annotations

import bisect
import logging
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Callable, Dict, Iterator, List, Optional, Tuple

from scoreforge_keys.core.key_event import KeySigEvent
from scoreforge_keys.io.document import XmlWriter, dom_error, int_attribute

if TYPE_CHECKING:
    from scoreforge_keys.core.timeline import Timeline
    from scoreforge_keys.core.transpose import IntervalLike

logger = logging.getLogger(__name__)


ErrorReporter = Callable[..., None]


class KeyList:
    """
    Ordered mapping of tick -> KeySigEvent.

    Events are copied on the way in and on the way out, so callers can
    never mutate the list through an event they hold.
    """

    def __init__(self, entries: Optional[Dict[int, KeySigEvent]] = None):
        self._ticks: List[int] = []
        self._events: Dict[int, KeySigEvent] = {}
        if entries:
            for tick, event in entries.items():
                self.insert(tick, event)

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def insert(self, tick: int, event: KeySigEvent) -> None:
        """Set the key at a tick, replacing any event already there."""
        if tick not in self._events:
            bisect.insort(self._ticks, tick)
        self._events[tick] = event.copy()

    def remove(self, tick: int) -> None:
        """Remove the key change at a tick. Raises KeyError if there is none."""
        del self._events[tick]
        self._ticks.pop(bisect.bisect_left(self._ticks, tick))

    def clear(self) -> None:
        self._ticks.clear()
        self._events.clear()

    def key(self, tick: int) -> KeySigEvent:
        """
        Key in effect at a tick.

        Returns an invalid event if the list is empty or the tick comes
        before the first key change.
        """
        i = bisect.bisect_right(self._ticks, tick)
        if i == 0:
            return KeySigEvent()
        return self._events[self._ticks[i - 1]].copy()

    def next_key_tick(self, tick: int) -> int:
        """Tick of the first key change after tick, or -1."""
        i = bisect.bisect_right(self._ticks, tick)
        return self._ticks[i] if i < len(self._ticks) else -1

    def prev_key_tick(self, tick: int) -> int:
        """Tick of the last key change before tick, or -1."""
        i = bisect.bisect_left(self._ticks, tick)
        return self._ticks[i - 1] if i > 0 else -1

    def ticks(self) -> List[int]:
        return list(self._ticks)

    def items(self) -> Iterator[Tuple[int, KeySigEvent]]:
        for tick in self._ticks:
            yield tick, self._events[tick].copy()

    def __setitem__(self, tick: int, event: KeySigEvent) -> None:
        self.insert(tick, event)

    def __getitem__(self, tick: int) -> KeySigEvent:
        return self._events[tick].copy()

    def __delitem__(self, tick: int) -> None:
        self.remove(tick)

    def __contains__(self, tick: object) -> bool:
        return tick in self._events

    def __len__(self) -> int:
        return len(self._ticks)

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._ticks))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyList):
            return NotImplemented
        return self._ticks == other._ticks and all(
            self._events[t] == other._events[t] for t in self._ticks
        )

    def __repr__(self) -> str:
        entries = ", ".join(f"{t}: {self._events[t]!r}" for t in self._ticks)
        return f"KeyList({{{entries}}})"

    # ------------------------------------------------------------------
    # Transposition
    # ------------------------------------------------------------------

    def transposed(self, interval: "IntervalLike") -> "KeyList":
        """New key list with every standard key transposed by interval."""
        from scoreforge_keys.core.transpose import transpose_key_event

        result = KeyList()
        for tick in self._ticks:
            result.insert(tick, transpose_key_event(self._events[tick], interval))
        return result

    # ------------------------------------------------------------------
    # I/O
    # ------------------------------------------------------------------

    def write(self, xml: XmlWriter, name: str) -> None:
        """
        Write the key list as a container element.

        Args:
            xml: Writer to emit into
            name: Tag of the container element
        """
        xml.stag(name)
        for tick in self._ticks:
            event = self._events[tick]
            if event.custom:
                xml.tag_e("key", tick=tick, custom=event.custom_type)
            else:
                xml.tag_e("key", tick=tick, idx=event.accidental_type)
        xml.etag()

    def read(
        self,
        element: ET.Element,
        timeline: "Timeline",
        on_error: ErrorReporter = dom_error
    ) -> None:
        """
        Read key changes from a container element.

        Args:
            element: Container whose children are <key> elements
            timeline: Converts file ticks to internal ticks
            on_error: Called with each element that cannot be read;
                reading continues with the next sibling
        """
        for e in element:
            if e.tag != "key":
                on_error(e)
                continue
            try:
                tick = int_attribute(e, "tick", 0)
                event = KeySigEvent()
                if "custom" in e.attrib:
                    event.set_custom_type(int_attribute(e, "custom"))
                else:
                    event.set_accidental_type(int_attribute(e, "idx", 0))
            except ValueError as exc:
                on_error(e, str(exc))
                continue
            if tick < 0:
                on_error(e, f"negative tick {tick}")
                continue
            self.insert(timeline.file_division(tick), event)
        logger.debug(f"Read {len(self)} key changes")
