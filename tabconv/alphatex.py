"""alphaTex generation.

This module converts a Tablature into alphaTex, the text notation read by
the alphaTab score renderer. Notes are written as ``fret.string`` with
strings numbered 1 (high e) to 6 (low E); durations are only written when
they change.

Examples
--------
>>> from tabconv.models import Beat, Measure, Note, Tablature
>>> tab = Tablature(measures=(Measure(beats=(Beat(notes=(Note(0, 5),), duration=8),), number=1),))
>>> print(tablature_to_alphatex(tab))
\\tempo 120
\\track "Guitar"
\\staff {tabs}
\\tuning E4 B3 G3 D3 A2 E2
\\ts 4 4
<BLANKLINE>
:8 5.1
"""

from __future__ import annotations

from dataclasses import dataclass

from tabconv.models import NUM_STRINGS, Beat, Measure, Note, Tablature, Technique

DEFAULT_TEMPO = 120
DEFAULT_TUNING = "E4 B3 G3 D3 A2 E2"
DEFAULT_TIME_SIGNATURE = "4/4"

# Octaves of the open strings in standard tuning, high string first
TUNING_OCTAVES: tuple[int, ...] = (4, 3, 3, 3, 2, 2)

# The model has no bend depth, so every bend is a full step
BEND_EFFECT = "b (0 4)"

INITIAL_DURATION = 4
EMPTY_MEASURE = ":1 r"
EMPTY_MEASURE_DURATION = 1
MEASURE_SEPARATOR = " | "

ALPHATEX_EXAMPLE = r"""\title "Test Tab"
\tempo 120
\track "Guitar"
\staff {tabs}
\tuning E4 B3 G3 D3 A2 E2
\ts 4 4

:8 (0.1 0.2 2.3 2.4 0.5) (0.1 0.2 2.3 2.4 0.5) |
(0.1 2.2 2.3 2.4 0.5) r 3.2 5.2 |
:4 (2.1 2.2 2.3 4.4 4.5 2.6) :8 r r |"""


@dataclass(frozen=True)
class AlphaTexOptions:
    """Caller-supplied metadata for the generated document.

    Parameters
    ----------
    title : str | None
        Song title for the ``\\title`` line.
    artist : str | None
        Artist for the ``\\artist`` line.
    tempo : int | None
        Tempo overriding the one stored on the first measure.
    """

    title: str | None = None
    artist: str | None = None
    tempo: int | None = None


def technique_effect(technique: Technique | None) -> str | None:
    """Map a technique to its alphaTex note effect.

    Parameters
    ----------
    technique : Technique | None
        The note's technique.

    Returns
    -------
    str | None
        The effect text without braces, or None when nothing is written.

    Raises
    ------
    ValueError
        If the technique has no mapping.

    Examples
    --------
    >>> technique_effect(Technique.SLIDE_DOWN)
    's'
    >>> technique_effect(Technique.RELEASE) is None
    True
    """
    if technique is None:
        return None
    if technique is Technique.HAMMER_ON:
        return "h"
    if technique is Technique.PULL_OFF:
        return "p"
    if technique is Technique.SLIDE_UP or technique is Technique.SLIDE_DOWN:
        return "s"
    if technique is Technique.VIBRATO:
        return "v"
    if technique is Technique.BEND:
        return BEND_EFFECT
    if technique is Technique.RELEASE:
        # alphaTex has no release effect
        return None
    msg = f"No alphaTex effect for technique: {technique!r}"
    raise ValueError(msg)


def note_to_alphatex(note: Note) -> str:
    """Format one note as ``fret.string`` plus an optional effect.

    Examples
    --------
    >>> note_to_alphatex(Note(string=1, fret=7, technique=Technique.BEND))
    '7.2 {b (0 4)}'
    """
    text = f"{note.fret}.{note.string + 1}"
    effect = technique_effect(note.technique)
    if effect:
        text += f" {{{effect}}}"
    return text


def beat_to_alphatex(beat: Beat, previous_duration: int) -> tuple[str, int]:
    """Format one beat, writing its duration only if it changed.

    Parameters
    ----------
    beat : Beat
        The beat to format.
    previous_duration : int
        Duration in effect before this beat.

    Returns
    -------
    tuple[str, int]
        The beat text and the duration in effect after it.

    Examples
    --------
    >>> from tabconv.models import Note
    >>> beat_to_alphatex(Beat(notes=(Note(0, 0), Note(1, 1)), duration=4), 4)
    ('(0.1 1.2)', 4)
    >>> beat_to_alphatex(Beat(notes=(), duration=8), 4)
    (':8 r', 8)
    """
    parts: list[str] = []
    if beat.duration != previous_duration:
        parts.append(f":{beat.duration}")

    if beat.is_rest:
        parts.append("r")
    elif len(beat.notes) == 1:
        parts.append(note_to_alphatex(beat.notes[0]))
    else:
        parts.append("(" + " ".join(note_to_alphatex(n) for n in beat.notes) + ")")

    return " ".join(parts), beat.duration


def measure_to_alphatex(measure: Measure, previous_duration: int) -> tuple[str, int]:
    """Format one measure, carrying the running duration through its beats.

    An empty measure is written as a whole rest.

    Returns
    -------
    tuple[str, int]
        The measure text and the duration in effect after it.
    """
    if not measure.beats:
        return EMPTY_MEASURE, EMPTY_MEASURE_DURATION

    texts: list[str] = []
    duration = previous_duration
    for beat in measure.beats:
        text, duration = beat_to_alphatex(beat, duration)
        texts.append(text)

    return " ".join(texts), duration


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _tuning_line(tablature: Tablature) -> str:
    if tablature.tuning is not None and len(tablature.tuning) == NUM_STRINGS:
        names = " ".join(f"{name}{octave}" for name, octave in zip(tablature.tuning, TUNING_OCTAVES))
        return f"\\tuning {names}"
    return f"\\tuning {DEFAULT_TUNING}"


def tablature_to_alphatex(tablature: Tablature, options: AlphaTexOptions | None = None) -> str:
    """Convert a tablature to an alphaTex document.

    This is the main entry point for alphaTex generation.

    Parameters
    ----------
    tablature : Tablature
        The tablature to convert.
    options : AlphaTexOptions | None
        Title, artist and tempo override.

    Returns
    -------
    str
        Header lines, a blank line, then all measures joined by bar
        separators.
    """
    if options is None:
        options = AlphaTexOptions()
    first = tablature.measures[0] if tablature.measures else None

    lines: list[str] = []
    if options.title:
        lines.append(f"\\title {_quote(options.title)}")
    if options.artist:
        lines.append(f"\\artist {_quote(options.artist)}")

    tempo = options.tempo or (first.tempo if first else None) or DEFAULT_TEMPO
    lines.append(f"\\tempo {tempo}")
    lines.append('\\track "Guitar"')
    lines.append("\\staff {tabs}")
    lines.append(_tuning_line(tablature))

    time_signature = (first.time_signature if first else None) or DEFAULT_TIME_SIGNATURE
    lines.append("\\ts " + time_signature.replace("/", " ", 1))
    lines.append("")

    measure_texts: list[str] = []
    duration = INITIAL_DURATION
    for measure in tablature.measures:
        text, duration = measure_to_alphatex(measure, duration)
        measure_texts.append(text)

    lines.append(MEASURE_SEPARATOR.join(measure_texts))
    return "\n".join(lines)
