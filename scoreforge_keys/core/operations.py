"""
Key signature operations.

Provides high-level functions that connect key lists to music21
streams and to key-list documents.
"""

from pathlib import Path
from typing import Optional, List, Union

from music21 import key, stream

from scoreforge_keys.core.accidental_state import AccidentalState
from scoreforge_keys.core.key_event import KeySigEvent
from scoreforge_keys.core.key_list import KeyList
from scoreforge_keys.core.timeline import Timeline, DEFAULT_DIVISION
from scoreforge_keys.core.transpose import IntervalLike
from scoreforge_keys.io.document import XmlWriter, parse_file, parse_string

KEY_LIST_TAG = "KeyList"


def key_event_from_music21(ks: key.KeySignature) -> KeySigEvent:
    """
    Convert a music21 key signature.

    Args:
        ks: music21 KeySignature or Key

    Returns:
        Standard KeySigEvent with the same sharps/flats count
    """
    return KeySigEvent(ks.sharps)


def key_event_to_music21(event: KeySigEvent) -> Optional[key.KeySignature]:
    """
    Convert a KeySigEvent to a music21 KeySignature.

    Returns:
        KeySignature, or None for an invalid event

    Raises:
        ValueError: For custom key signatures, which music21 cannot
            express as a sharps count
    """
    if event.invalid:
        return None
    if event.custom:
        raise ValueError(f"Custom key signature {event.custom_type} has no sharps count")
    return key.KeySignature(event.accidental_type)


def key_name(accidental_type: int, mode: str = "major") -> str:
    """
    Get the name of a key.

    Args:
        accidental_type: Sharps (positive) or flats (negative)
        mode: "major" or "minor"

    Returns:
        Key name like "G major" or "Bb minor"
    """
    k = key.KeySignature(accidental_type).asKey(mode)
    return f"{k.tonic.name.replace('-', 'b')} {k.mode}"


def key_list_from_stream(
    s: stream.Stream,
    division: int = DEFAULT_DIVISION
) -> KeyList:
    """
    Collect the key signatures of a music21 stream.

    Args:
        s: Score, part or measure stream
        division: Ticks per quarter note

    Returns:
        KeyList with one entry per key signature offset
    """
    key_list = KeyList()
    flat = s.flatten()
    for ks in flat.getElementsByClass(key.KeySignature):
        tick = int(round(float(ks.getOffsetBySite(flat)) * division))
        key_list.insert(tick, key_event_from_music21(ks))
    return key_list


def transpose_key_list(key_list: KeyList, interval: IntervalLike) -> KeyList:
    """
    Transpose all key signatures of a key list.

    Args:
        key_list: Key list to transpose
        interval: Interval name like "P5", "-M2", a semitone count, or
            an Interval

    Returns:
        New KeyList
    """
    return key_list.transposed(interval)


def accidental_state_at(key_list: KeyList, tick: int) -> AccidentalState:
    """Accidental state of the key in effect at tick."""
    return AccidentalState(key_list.key(tick))


def write_key_list(
    key_list: KeyList,
    filepath: Optional[Union[str, Path]] = None,
    name: str = KEY_LIST_TAG,
    indent: bool = True
) -> str:
    """
    Serialize a key list document.

    Args:
        key_list: Key list to write
        filepath: Optional output path
        name: Tag of the key list container

    Returns:
        XML text of the document
    """
    xml = XmlWriter(indent=indent)
    key_list.write(xml, name)
    if filepath is not None:
        xml.write(filepath)
    return xml.to_string()


def read_key_list(
    source: Union[str, Path],
    timeline: Optional[Timeline] = None,
    name: str = KEY_LIST_TAG
) -> KeyList:
    """
    Read a key list document.

    Args:
        source: XML text or path to a file
        timeline: Time base for tick conversion (default: same division)
        name: Tag of the key list container

    Returns:
        KeyList; empty if the document has no container
    """
    if isinstance(source, Path) or not source.lstrip().startswith("<"):
        root = parse_file(source)
    else:
        root = parse_string(source)

    timeline = timeline or Timeline()
    key_list = KeyList()
    container = root if root.tag == name else root.find(name)
    if container is not None:
        key_list.read(container, timeline)
    return key_list


def get_key_names(mode: str = "major") -> List[str]:
    """
    Get names of all key signatures, from 7 flats to 7 sharps.

    Returns:
        List of key names
    """
    return [key_name(n, mode) for n in range(-7, 8)]
