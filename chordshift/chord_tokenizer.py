"""ChordTokenizer: finds chord symbols inside arbitrary lines of text."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Final

NOTE_LETTERS: Final[frozenset[str]] = frozenset("ABCDEFG")
ACCIDENTALS: Final[frozenset[str]] = frozenset("#b")
SLASH = "/"

# Characters that end a chord suffix (whitespace is checked separately).
_SUFFIX_STOP: Final[frozenset[str]] = NOTE_LETTERS | ACCIDENTALS | {SLASH}


@dataclass(frozen=True)
class ChordToken:
    """
    One chord symbol matched inside a line.

    Attributes:
        root:   Root spelling as written, e.g. ``"F#"``.
        suffix: Quality text after the root (``"m7"``, ``"sus4"``); opaque.
        bass:   Bass spelling after a slash, or None.
        start:  Offset of the first character of the match.
        end:    Offset one past the last character of the match.
    """

    root: str
    suffix: str = ""
    bass: str | None = None
    start: int = 0
    end: int = 0

    @property
    def text(self) -> str:
        """The chord symbol exactly as it appeared, e.g. ``'Am7/C'``."""
        if self.bass is None:
            return f"{self.root}{self.suffix}"
        return f"{self.root}{self.suffix}/{self.bass}"


def is_candidate_line(line: str) -> bool:
    """True if the line holds at least one capital A-G and must be scanned."""
    return any(ch in NOTE_LETTERS for ch in line)


def _scan_note(text: str, pos: int) -> int:
    """Return the end offset of a note starting at ``pos``, or ``pos`` if none."""
    if pos >= len(text) or text[pos] not in NOTE_LETTERS:
        return pos
    pos += 1
    if pos < len(text) and text[pos] in ACCIDENTALS:
        pos += 1
    return pos


def _scan_suffix(text: str, pos: int) -> int:
    while pos < len(text):
        ch = text[pos]
        if ch in _SUFFIX_STOP or ch.isspace():
            break
        pos += 1
    return pos


def iter_chord_tokens(text: str) -> Iterator[ChordToken]:
    """
    Yield every chord token in ``text`` from left to right.

    Grammar: ``Root Suffix? ("/" Bass)?`` where Root and Bass are a capital
    A-G with an optional ``#`` or ``b``. No word boundary is required, so a
    capital A-G inside ordinary prose is matched as well. A slash that is
    not followed by a note letter is left in the text as-is.

    Each character is visited a bounded number of times, so the scan is
    linear in ``len(text)``.
    """
    pos = 0
    length = len(text)
    while pos < length:
        if text[pos] not in NOTE_LETTERS:
            pos += 1
            continue

        start = pos
        root_end = _scan_note(text, start)
        suffix_end = _scan_suffix(text, root_end)
        end = suffix_end
        bass = None

        if suffix_end < length and text[suffix_end] == SLASH:
            bass_end = _scan_note(text, suffix_end + 1)
            if bass_end > suffix_end + 1:
                bass = text[suffix_end + 1:bass_end]
                end = bass_end

        yield ChordToken(
            root=text[start:root_end],
            suffix=text[root_end:suffix_end],
            bass=bass,
            start=start,
            end=end,
        )
        pos = end


def find_chord_tokens(text: str) -> list[ChordToken]:
    """List form of :func:`iter_chord_tokens`."""
    return list(iter_chord_tokens(text))
