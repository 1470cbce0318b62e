"""chordshift CLI entry point."""

import logging
import re
import sys
from pathlib import Path
from typing import TextIO

import click

from chordshift import __version__
from chordshift.pitch import KEY_CHOICES, ChordShiftError, normalize_note
from chordshift.transposer import Accidental, Transposer

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _result_filename(from_key: str, to_key: str) -> str:
    """Build a safe filename for a transposed sheet, e.g. 'transposed_C_to_Fsharp.txt'.

    Only the primary spelling of a compound key is used, and '#' is spelled
    out because it is awkward in filenames.
    """
    parts = []
    for key in (from_key, to_key):
        primary = normalize_note(key.split("/", maxsplit=1)[0]).replace("#", "sharp")
        parts.append(re.sub(r"[^\w-]", "", primary))
    return f"transposed_{parts[0]}_to_{parts[1]}.txt"


def _read_sheet(source: TextIO) -> str:
    text = source.read()
    if not text.strip():
        click.echo("  ERROR: No chords to transpose; the input is empty.", err=True)
        sys.exit(1)
    return text


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(
    context_settings={
        "help_option_names": ["-h", "--help"],
        "auto_envvar_prefix": "CHORDSHIFT",
    }
)
@click.version_option(version=__version__, prog_name="chordshift")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Verbosity of diagnostic messages written to stderr.",
)
def main(log_level: str) -> None:
    """chordshift — transpose chord sheets between keys."""
    logging.basicConfig(level=getattr(logging, log_level.upper()), format=LOG_FORMAT)


# ── transpose subcommand ───────────────────────────────────────────────────────

@main.command()
@click.argument("input_file", metavar="INPUT", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--from",
    "from_key",
    default=None,
    metavar="KEY",
    help="Source key (e.g. C, Bb, 'C#/Db'). Detected from the first chord when omitted.",
)
@click.option(
    "--to",
    "to_key",
    required=True,
    metavar="KEY",
    help="Target key (e.g. D, F#, 'A#/Bb').",
)
@click.option(
    "--accidental",
    type=click.Choice([member.value for member in Accidental], case_sensitive=False),
    default=Transposer.DEFAULT_ACCIDENTAL.value,
    show_default=True,
    help="Spell accidentals in the output with sharps or flats.",
)
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help=(
        "Write the result to PATH instead of stdout. If PATH is a directory, "
        "the file is named transposed_<from>_to_<to>.txt."
    ),
)
def transpose(
    input_file: TextIO,
    from_key: str | None,
    to_key: str,
    accidental: str,
    output: str | None,
) -> None:
    """
    Transpose every chord in a chord sheet to another key.

    INPUT is a plain-text chord sheet; reads stdin when omitted or '-'.
    Lyric lines and spacing are kept as they are.

    \b
    Examples:
      chordshift transpose song.txt --from C --to D
      chordshift transpose song.txt --to Eb --accidental flat -o out/
      cat song.txt | chordshift transpose --from "C#/Db" --to A
    """
    text = _read_sheet(input_file)
    transposer = Transposer(default_accidental=accidental)

    if from_key is None:
        from_key = transposer.detect_key(text)
        click.echo(f"Detected key: {from_key}", err=True)

    try:
        result = transposer.transpose(text, from_key, to_key)
    except ChordShiftError as exc:
        click.echo(f"  ERROR: {exc}", err=True)
        sys.exit(1)

    if output is None:
        click.echo(result, nl=not result.endswith("\n"))
        return

    destination = Path(output)
    if destination.is_dir():
        destination = destination / _result_filename(from_key, to_key)
    try:
        destination.write_text(result, encoding="utf-8")
    except OSError as exc:
        click.echo(f"  ERROR: Could not write output file — {exc}", err=True)
        sys.exit(1)
    click.echo(f"Done!  Transposed {from_key} → {to_key}, written to '{destination}'.", err=True)


# ── detect-key subcommand ──────────────────────────────────────────────────────

@main.command("detect-key")
@click.argument("input_file", metavar="INPUT", type=click.File("r", encoding="utf-8"), default="-")
def detect_key(input_file: TextIO) -> None:
    """
    Print the key suggested by the first chord of a chord sheet.

    This is a quick guess, not harmonic analysis; sheets without any chord
    report C.
    """
    text = _read_sheet(input_file)
    click.echo(Transposer().detect_key(text))


# ── chords subcommand ──────────────────────────────────────────────────────────

@main.command()
@click.argument("input_file", metavar="INPUT", type=click.File("r", encoding="utf-8"), default="-")
def chords(input_file: TextIO) -> None:
    """List the distinct chord symbols found in a chord sheet, sorted."""
    text = _read_sheet(input_file)
    transposer = Transposer()

    if not transposer.validate_chords(text):
        click.echo("  WARNING: No chords found in the input.", err=True)
        sys.exit(1)

    for chord in transposer.extract_chords(text):
        click.echo(chord)


# ── keys subcommand ────────────────────────────────────────────────────────────

@main.command()
def keys() -> None:
    """List the keys accepted by --from and --to."""
    for key in KEY_CHOICES:
        click.echo(key)
