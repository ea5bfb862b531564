"""
Tests for music21 bridging and key list documents.
"""

import pytest
from music21 import key, note, stream

from scoreforge_keys.core.accidental_state import AccidentalVal
from scoreforge_keys.core.exceptions import XmlReadError, XmlWriteError
from scoreforge_keys.core.key_event import KeySigEvent
from scoreforge_keys.core.key_list import KeyList
from scoreforge_keys.core.operations import (
    accidental_state_at,
    get_key_names,
    key_event_from_music21,
    key_event_to_music21,
    key_list_from_stream,
    key_name,
    read_key_list,
    transpose_key_list,
    write_key_list,
)
from scoreforge_keys.core.timeline import Timeline
from scoreforge_keys.io.document import XmlWriter, parse_file, parse_string


class TestMusic21Bridge:
    """Tests for conversion to and from music21."""

    def test_from_music21(self):
        assert key_event_from_music21(key.KeySignature(-4)) == KeySigEvent(-4)
        assert key_event_from_music21(key.Key("D")) == KeySigEvent(2)

    def test_to_music21(self):
        ks = key_event_to_music21(KeySigEvent(3))
        assert isinstance(ks, key.KeySignature)
        assert ks.sharps == 3

    def test_to_music21_invalid(self):
        assert key_event_to_music21(KeySigEvent()) is None

    def test_to_music21_custom(self):
        ev = KeySigEvent()
        ev.set_custom_type(1)
        with pytest.raises(ValueError):
            key_event_to_music21(ev)

    def test_key_name(self):
        assert key_name(0) == "C major"
        assert key_name(1) == "G major"
        assert key_name(-7) == "Cb major"
        assert key_name(-2, "minor") == "G minor"

    def test_get_key_names(self):
        names = get_key_names()
        assert len(names) == 15
        assert names[0] == "Cb major"
        assert names[-1] == "C# major"

    def test_key_list_from_stream(self):
        """Key signatures are collected with their tick positions."""
        part = stream.Part()
        m1 = stream.Measure(number=1)
        m1.append(key.KeySignature(2))
        m1.append(note.Note("D4", quarterLength=4.0))
        m2 = stream.Measure(number=2)
        m2.append(key.KeySignature(-1))
        m2.append(note.Note("F4", quarterLength=4.0))
        part.append(m1)
        part.append(m2)

        kl = key_list_from_stream(part, division=480)
        assert kl.ticks() == [0, 1920]
        assert kl.key(1000).accidental_type == 2
        assert kl.key(1920).accidental_type == -1


class TestKeyListOperations:
    """Tests for operations on key lists."""

    def test_transpose_key_list(self):
        kl = KeyList({0: KeySigEvent(0), 960: KeySigEvent(3)})
        result = transpose_key_list(kl, "-M2")
        assert result.key(0).accidental_type == -2
        assert result.key(960).accidental_type == 1

    def test_accidental_state_at(self):
        kl = KeyList({0: KeySigEvent(1), 960: KeySigEvent(-1)})
        state = accidental_state_at(kl, 100)
        assert state.accidental_val(3) is AccidentalVal.SHARP
        state = accidental_state_at(kl, 960)
        assert state.accidental_val(6) is AccidentalVal.FLAT
        assert state.accidental_val(3) is AccidentalVal.NATURAL

    def test_accidental_state_before_first_key(self):
        kl = KeyList({480: KeySigEvent(4)})
        assert accidental_state_at(kl, 0).sharps() == []


class TestDocuments:
    """Tests for reading and writing key list documents."""

    def test_write_and_read_string(self):
        kl = KeyList({0: KeySigEvent(-2), 1920: KeySigEvent(5)})
        text = write_key_list(kl)
        assert "<KeyList>" in text
        assert read_key_list(text) == kl

    def test_write_and_read_file(self, tmp_path):
        kl = KeyList({0: KeySigEvent(3)})
        path = tmp_path / "keys.xml"
        write_key_list(kl, path)
        assert path.exists()
        assert read_key_list(path) == kl
        assert read_key_list(str(path)) == kl

    def test_write_file_returns_text(self, tmp_path):
        """Writing to a path still returns the document text."""
        kl = KeyList({0: KeySigEvent(-4), 960: KeySigEvent(2)})
        path = tmp_path / "out" / "keys.xml"
        text = write_key_list(kl, path)
        assert "<KeyList>" in text
        assert path.read_text(encoding="utf-8").endswith(text + "\n")
        assert read_key_list(text) == kl
        assert read_key_list(path) == kl

    def test_read_with_timeline(self):
        text = '<scoreforge><KeyList><key tick="96" idx="1"/></KeyList></scoreforge>'
        kl = read_key_list(text, Timeline(division=480, file_division=96))
        assert kl.ticks() == [480]

    def test_read_missing_container(self):
        assert len(read_key_list("<scoreforge/>")) == 0

    def test_read_malformed(self):
        with pytest.raises(XmlReadError):
            read_key_list("<scoreforge><KeyList></scoreforge>")

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_file(tmp_path / "missing.xml")


class TestXmlWriter:
    """Tests for the XML writer."""

    def test_nested_containers(self):
        xml = XmlWriter(root="scoreforge", version="1.0")
        xml.stag("Staff", id=1)
        xml.stag("KeyList")
        xml.tag_e("key", tick=0, idx=0)
        xml.etag()
        xml.etag()
        root = parse_string(xml.to_string())
        assert root.get("version") == "1.0"
        assert root.find("Staff/KeyList/key").get("idx") == "0"

    def test_unbalanced_etag(self):
        xml = XmlWriter()
        with pytest.raises(XmlWriteError):
            xml.etag()

    def test_unclosed_container(self):
        xml = XmlWriter()
        xml.stag("KeyList")
        with pytest.raises(XmlWriteError):
            xml.to_string()

    def test_write_after_finish(self):
        xml = XmlWriter()
        xml.to_string()
        with pytest.raises(XmlWriteError):
            xml.tag_e("key")

    def test_to_string_twice(self):
        """A finished document can be serialized again."""
        xml = XmlWriter()
        xml.stag("KeyList")
        xml.tag_e("key", tick=0, idx=1)
        xml.etag()
        first = xml.to_string()
        assert xml.to_string() == first
        assert xml.finish() is xml.finish()
