"""Pitch-class model: note spellings, enharmonic pairs and semitone arithmetic."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Final, Mapping

logger = logging.getLogger(__name__)

SEMITONES_PER_OCTAVE = 12

# ── Spelling tables (index 0 = C) ───────────────────────────────────────────

SHARP_NAMES: Final[tuple[str, ...]] = (
    "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B",
)
FLAT_NAMES: Final[tuple[str, ...]] = (
    "C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B",
)

#: Sharp <-> flat spelling of the five accidental pitch classes.
ENHARMONIC_EQUIVALENTS: Final[Mapping[str, str]] = MappingProxyType({
    "C#": "Db", "Db": "C#",
    "D#": "Eb", "Eb": "D#",
    "F#": "Gb", "Gb": "F#",
    "G#": "Ab", "Ab": "G#",
    "A#": "Bb", "Bb": "A#",
})

#: Keys as offered to users, accidentals shown in both spellings.
KEY_CHOICES: Final[tuple[str, ...]] = tuple(
    sharp if sharp == flat else f"{sharp}/{flat}"
    for sharp, flat in zip(SHARP_NAMES, FLAT_NAMES)
)

_UNICODE_ACCIDENTALS: Final[Mapping[str, str]] = MappingProxyType({"♭": "b", "♯": "#"})


# ── Errors ──────────────────────────────────────────────────────────────────

class ChordShiftError(ValueError):
    """Base class for all chordshift input errors."""


class InvalidNote(ChordShiftError):
    """A note spelling that does not name one of the twelve pitch classes."""

    def __init__(self, note: str, message: str | None = None) -> None:
        self.note = note
        super().__init__(message or f"Invalid note: '{note}'")


class InvalidKey(InvalidNote):
    """A source or target key that cannot be resolved to a pitch class."""

    def __init__(self, key: str) -> None:
        super().__init__(key, f"Invalid key: '{key}'. Use one of: {', '.join(KEY_CHOICES)}.")


# ── Public API ──────────────────────────────────────────────────────────────

def normalize_note(note: str) -> str:
    """
    Canonicalize a note spelling without validating it.

    Whitespace is stripped, the Unicode glyphs ``♭``/``♯`` become ``b``/``#``
    and the letter is upper-cased. The accidental keeps its case so that a
    flat ``b`` is never mistaken for the note B.

    Args:
        note: Raw spelling such as ``" bb"``, ``"F♯"`` or ``"c#"``.

    Returns:
        Normalized spelling, e.g. ``"Bb"``, ``"F#"``, ``"C#"``.
    """
    note = note.strip()
    for glyph, ascii_form in _UNICODE_ACCIDENTALS.items():
        note = note.replace(glyph, ascii_form)
    return note[:1].upper() + note[1:]


def resolve_index(note: str) -> int:
    """
    Return the pitch-class index (0-11) of a note or key spelling.

    A compound display form such as ``"C#/Db"`` is reduced to its first
    segment before lookup.

    Raises:
        InvalidNote: If the spelling is not in the sharp or flat table.
    """
    primary = normalize_note(note.split("/", maxsplit=1)[0])
    if primary in SHARP_NAMES:
        return SHARP_NAMES.index(primary)
    if primary in FLAT_NAMES:
        return FLAT_NAMES.index(primary)
    raise InvalidNote(note)


def semitone_distance(from_key: str, to_key: str) -> int:
    """
    Upward shift in semitones that takes ``from_key`` to ``to_key``.

    The result is always in ``[0, 11]``: moving from C down to B is +11.

    Raises:
        InvalidKey: If either key cannot be resolved.
    """
    indices = []
    for key in (from_key, to_key):
        try:
            indices.append(resolve_index(key))
        except InvalidNote:
            logger.warning("Cannot resolve key %r", key)
            raise InvalidKey(key) from None
    from_index, to_index = indices
    return (to_index - from_index) % SEMITONES_PER_OCTAVE


def spell_pitch(index: int, use_flats: bool = False) -> str:
    """Spell a pitch-class index with the flat or sharp table."""
    table = FLAT_NAMES if use_flats else SHARP_NAMES
    return table[index % SEMITONES_PER_OCTAVE]


def enharmonic_equivalent(note: str) -> str:
    """
    Return the other spelling of an accidental note (``"C#"`` -> ``"Db"``).

    Naturals have no alternative spelling and are returned normalized.

    Raises:
        InvalidNote: If ``note`` is not a recognized spelling.
    """
    normalized = normalize_note(note.split("/", maxsplit=1)[0])
    resolve_index(normalized)
    return ENHARMONIC_EQUIVALENTS.get(normalized, normalized)
