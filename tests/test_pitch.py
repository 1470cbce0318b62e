"""Unit tests for the pitch-class resolver."""

import pytest

from chordshift.pitch import (
    ENHARMONIC_EQUIVALENTS,
    FLAT_NAMES,
    KEY_CHOICES,
    SHARP_NAMES,
    ChordShiftError,
    InvalidKey,
    InvalidNote,
    enharmonic_equivalent,
    normalize_note,
    resolve_index,
    semitone_distance,
    spell_pitch,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        (" C ", "C"),
        ("c#", "C#"),
        ("bb", "Bb"),
        ("B♭", "Bb"),
        ("f♯", "F#"),
        ("Eb\n", "Eb"),
    ],
)
def test_normalize_note(raw: str, expected: str) -> None:
    assert normalize_note(raw) == expected


def test_resolve_index_covers_both_tables() -> None:
    for index, (sharp, flat) in enumerate(zip(SHARP_NAMES, FLAT_NAMES)):
        assert resolve_index(sharp) == index
        assert resolve_index(flat) == index


def test_recognized_spellings_count() -> None:
    assert len(set(SHARP_NAMES) | set(FLAT_NAMES)) == 17


@pytest.mark.parametrize("key,expected", [("C#/Db", 1), ("A#/Bb", 10), ("G/", 7)])
def test_resolve_index_strips_compound_form(key: str, expected: int) -> None:
    assert resolve_index(key) == expected


@pytest.mark.parametrize("note", ["X", "H", "", "Cb", "E#", "B#", "Fb", "C##", "CB"])
def test_resolve_index_rejects_unknown_spellings(note: str) -> None:
    with pytest.raises(InvalidNote) as excinfo:
        resolve_index(note)
    assert excinfo.value.note == note


@pytest.mark.parametrize(
    "from_key,to_key,expected",
    [
        ("C", "D", 2),
        ("A", "C", 3),
        ("C", "B", 11),
        ("D", "C", 10),
        ("Bb", "A#", 0),
        ("C#/Db", "F#/Gb", 5),
    ],
)
def test_semitone_distance(from_key: str, to_key: str, expected: int) -> None:
    assert semitone_distance(from_key, to_key) == expected


@pytest.mark.parametrize("from_key", SHARP_NAMES)
@pytest.mark.parametrize("to_key", FLAT_NAMES)
def test_semitone_distance_is_in_octave_range(from_key: str, to_key: str) -> None:
    assert 0 <= semitone_distance(from_key, to_key) <= 11


@pytest.mark.parametrize("from_key,to_key", [("X", "C"), ("C", "H#"), ("", "C")])
def test_semitone_distance_invalid_key(from_key: str, to_key: str) -> None:
    with pytest.raises(InvalidKey):
        semitone_distance(from_key, to_key)


def test_invalid_key_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="Invalid key: 'X'"):
        semitone_distance("X", "C")
    assert issubclass(InvalidKey, ChordShiftError)


def test_spell_pitch_sharp_and_flat() -> None:
    assert spell_pitch(1) == "C#"
    assert spell_pitch(1, use_flats=True) == "Db"
    assert spell_pitch(9, use_flats=True) == spell_pitch(9) == "A"


def test_spell_pitch_wraps_index() -> None:
    assert spell_pitch(14) == "D"


def test_enharmonic_equivalent() -> None:
    assert enharmonic_equivalent("C#") == "Db"
    assert enharmonic_equivalent("gb") == "F#"
    assert enharmonic_equivalent("A#/Bb") == "Bb"
    assert enharmonic_equivalent("E") == "E"


def test_enharmonic_equivalent_rejects_unknown() -> None:
    with pytest.raises(InvalidNote):
        enharmonic_equivalent("Cb")


def test_enharmonic_map_is_symmetric_and_read_only() -> None:
    for sharp, flat in ENHARMONIC_EQUIVALENTS.items():
        assert ENHARMONIC_EQUIVALENTS[flat] == sharp
        assert resolve_index(sharp) == resolve_index(flat)
    with pytest.raises(TypeError):
        ENHARMONIC_EQUIVALENTS["E"] = "Fb"  # type: ignore[index]


def test_key_choices_match_display_forms() -> None:
    assert KEY_CHOICES == (
        "C", "C#/Db", "D", "D#/Eb", "E", "F", "F#/Gb", "G", "G#/Ab", "A", "A#/Bb", "B",
    )
