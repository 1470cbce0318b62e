"""Transposer: rewrites chord symbols in free-form text into another key."""

from __future__ import annotations

import enum
import logging

from chordshift.chord_tokenizer import ChordToken, is_candidate_line, iter_chord_tokens
from chordshift.pitch import InvalidNote, resolve_index, semitone_distance, spell_pitch

logger = logging.getLogger(__name__)

DEFAULT_KEY = "C"
LINE_SEPARATOR = "\n"


class Accidental(str, enum.Enum):
    """Spelling used for accidental pitch classes in the output."""

    SHARP = "sharp"
    FLAT = "flat"

    @classmethod
    def coerce(cls, value: Accidental | str) -> Accidental:
        """Accept a member or its case-insensitive string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Unsupported accidental preference '{value}'. Use one of: {choices}."
            ) from None


class Transposer:
    """
    Moves every chord in a chord sheet by a fixed number of semitones.

    Algorithm overview
    ------------------
    1. **Shift** - the upward distance from the source key to the target key
       is computed once, modulo 12. Going "down" a semitone is +11.

    2. **Line filter** - the text is split on newlines. A line is scanned only
       if it contains a capital A-G; every other line is copied verbatim.

    3. **Token rewrite** - each chord token on a scanned line has its root
       and optional bass moved by the shift and respelled from the sharp or
       flat table. The quality suffix is copied through untouched.

    4. **Fail-soft** - a root or bass spelling outside the twelve pitch
       classes (``Cb``, ``E#``) is left as written instead of aborting the
       request.

    The instance holds no per-call state and may be shared between threads.
    """

    DEFAULT_ACCIDENTAL = Accidental.SHARP

    def __init__(self, default_accidental: Accidental | str = DEFAULT_ACCIDENTAL) -> None:
        """
        Args:
            default_accidental: Spelling used when ``transpose`` is called
                                without an explicit preference.
        """
        self.default_accidental = Accidental.coerce(default_accidental)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _transpose_line(self, line: str, semitones: int, use_flats: bool) -> str:
        if not is_candidate_line(line):
            return line

        pieces: list[str] = []
        cursor = 0
        for token in iter_chord_tokens(line):
            pieces.append(line[cursor:token.start])
            pieces.append(self.transpose_chord(token, semitones, use_flats))
            cursor = token.end
        pieces.append(line[cursor:])
        return "".join(pieces)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def transpose_note(self, note: str, semitones: int, use_flats: bool = False) -> str:
        """
        Move a single note by ``semitones`` and respell it.

        An unrecognized spelling is returned exactly as given.
        """
        try:
            index = resolve_index(note)
        except InvalidNote:
            logger.debug("Leaving unrecognized note %r unchanged", note)
            return note
        return spell_pitch(index + semitones, use_flats)

    def transpose_chord(self, token: ChordToken, semitones: int, use_flats: bool = False) -> str:
        """
        Rebuild one chord symbol in the new key.

        Args:
            token:     Chord token as produced by the tokenizer.
            semitones: Upward shift, any integer (reduced modulo 12).
            use_flats: Spell accidentals with flats instead of sharps.

        Returns:
            The transposed chord text, e.g. ``'Bm7/D'``.
        """
        root = self.transpose_note(token.root, semitones, use_flats)
        if token.bass is None:
            return f"{root}{token.suffix}"
        bass = self.transpose_note(token.bass, semitones, use_flats)
        return f"{root}{token.suffix}/{bass}"

    def transpose(
        self,
        text: str,
        from_key: str,
        to_key: str,
        accidental: Accidental | str | None = None,
    ) -> str:
        """
        Transpose every chord in ``text`` from ``from_key`` to ``to_key``.

        Lines, blank lines and all non-chord characters are preserved; only
        chord roots and bass notes change. When both keys name the same pitch
        class the text is returned as-is.

        Args:
            text:       Chord sheet, possibly with lyrics between chord lines.
            from_key:   Source key, e.g. ``"C"``, ``"Bb"`` or ``"C#/Db"``.
            to_key:     Target key in the same forms.
            accidental: ``"sharp"`` or ``"flat"``; defaults to the instance
                        preference.

        Returns:
            The transposed text.

        Raises:
            InvalidKey: If either key cannot be resolved. Nothing is
                        transposed in that case.
            ValueError: If ``accidental`` is not a supported preference.
        """
        semitones = semitone_distance(from_key, to_key)
        preference = Accidental.coerce(accidental or self.default_accidental)
        use_flats = preference is Accidental.FLAT

        if semitones == 0:
            # Same key: chords keep their original spelling.
            return text

        lines = text.split(LINE_SEPARATOR)
        logger.debug(
            "Transposing %d line(s) from %s to %s (+%d, %s)",
            len(lines), from_key, to_key, semitones, preference.value,
        )
        return LINE_SEPARATOR.join(
            self._transpose_line(line, semitones, use_flats) for line in lines
        )

    def extract_chords(self, text: str) -> list[str]:
        """Unique chord symbols found anywhere in ``text``, sorted."""
        return sorted({token.text for token in iter_chord_tokens(text)})

    def detect_key(self, text: str) -> str:
        """
        Guess the key as the root of the first chord in document order.

        This is a heuristic, not harmonic analysis. Returns ``"C"`` when the
        text holds no chord at all.
        """
        first = next(iter_chord_tokens(text), None)
        if first is None:
            return DEFAULT_KEY
        return first.root

    def validate_chords(self, text: str) -> bool:
        """True if at least one chord symbol occurs in ``text``."""
        return next(iter_chord_tokens(text), None) is not None


# ── Module-level shortcuts ─────────────────────────────────────────────────────

_default_transposer = Transposer()


def transpose(
    text: str,
    from_key: str,
    to_key: str,
    accidental: Accidental | str = Accidental.SHARP,
) -> str:
    """Shortcut for :meth:`Transposer.transpose` on a shared instance."""
    return _default_transposer.transpose(text, from_key, to_key, accidental)


def extract_chords(text: str) -> list[str]:
    """Shortcut for :meth:`Transposer.extract_chords`."""
    return _default_transposer.extract_chords(text)


def detect_key(text: str) -> str:
    """Shortcut for :meth:`Transposer.detect_key`."""
    return _default_transposer.detect_key(text)


def validate_chords(text: str) -> bool:
    """Shortcut for :meth:`Transposer.validate_chords`."""
    return _default_transposer.validate_chords(text)
