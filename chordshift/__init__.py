"""chordshift: transpose chord sheets between keys."""

from chordshift.pitch import InvalidKey, InvalidNote, KEY_CHOICES
from chordshift.transposer import (
    Accidental,
    Transposer,
    detect_key,
    extract_chords,
    transpose,
    validate_chords,
)

__version__ = "0.1.0"

__all__ = [
    "Accidental",
    "InvalidKey",
    "InvalidNote",
    "KEY_CHOICES",
    "Transposer",
    "__version__",
    "detect_key",
    "extract_chords",
    "transpose",
    "validate_chords",
]
