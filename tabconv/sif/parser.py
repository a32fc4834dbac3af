"""SIF (Songsterr Import Format) parser.

SIF is a compact, line-oriented format for typing tablature in by hand,
for example while reading it off a screenshot. A document has an
optional header, then measures made of beat lines::

    # Section: Verse 1
    # Tempo: 120
    # Time: 4/4
    ---
    MEASURE 1 | Em | let ring
    e0 B0 G2 D2 A0 : 4
    B0 G2 : 8
    e0 B0 : 8 | "Mir-"

Note tokens are a string letter (``e B G D A E``, high to low) followed by
a fret and an optional technique: ``h`` hammer-on, ``p`` pull-off, ``b``
bend, ``/`` slide up, ``\\`` slide down, ``~`` vibrato. Durations are 1, 2,
4, 8 or 16 and default to 8.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace

from tabconv.models import MAX_FRET, NUM_STRINGS, Beat, Measure, Note, Tablature, Technique

logger = logging.getLogger(__name__)

HEADER_RE = re.compile(r"^#\s*(\w+):\s*(.+)$")
MEASURE_PREFIX_RE = re.compile(r"^MEASURE\s*", re.IGNORECASE)
NOTE_TOKEN_RE = re.compile(r"^([eBGDAE])(\d{1,2})([hpb/\\~])?$")
LYRIC_RE = re.compile(r'"([^"]*)"')
LEADING_INT_RE = re.compile(r"^\d+")

HEADER_SEPARATOR = "---"

STRING_INDEX: dict[str, int] = {"e": 0, "B": 1, "G": 2, "D": 3, "A": 4, "E": 5}

SIF_DURATIONS: frozenset[int] = frozenset({1, 2, 4, 8, 16})
DEFAULT_SIF_DURATION = 8


@dataclass(frozen=True)
class SifHeader:
    """Metadata from the ``# Key: Value`` header lines.

    Parameters
    ----------
    section : str | None
        Section label for the first measure.
    tempo : int | None
        Tempo in bpm for the first measure.
    time_signature : str | None
        Time signature for the first measure, as written.
    tuning : tuple[str, ...] | None
        Open-string names in the order written.
    instruction : str | None
        Performance instruction for the first measure.
    """

    section: str | None = None
    tempo: int | None = None
    time_signature: str | None = None
    tuning: tuple[str, ...] | None = None
    instruction: str | None = None


@dataclass(frozen=True)
class MeasureHeader:
    """Fields of a ``MEASURE <number> | <chord> | <instruction>`` line."""

    number: int | None = None
    chord: str | None = None
    instruction: str | None = None


@dataclass
class _MeasureDraft:
    """A measure still collecting beat lines."""

    number: int
    section: str | None = None
    tempo: int | None = None
    time_signature: str | None = None
    instructions: tuple[str, ...] | None = None
    pending_chord: str | None = None
    beats: list[Beat] = field(default_factory=list)

    def add_beat(self, beat: Beat) -> None:
        if self.pending_chord is not None:
            beat = Beat(notes=beat.notes, duration=beat.duration, chord=self.pending_chord, lyric=beat.lyric)
            self.pending_chord = None
        self.beats.append(beat)

    def build(self) -> Measure:
        return Measure(
            beats=tuple(self.beats),
            number=self.number,
            section=self.section,
            tempo=self.tempo,
            time_signature=self.time_signature,
            instructions=self.instructions,
        )


def parse_note_token(token: str) -> Note | None:
    """Parse a note token such as ``e0``, ``B2h`` or ``G12b``.

    Parameters
    ----------
    token : str
        A single whitespace-free token.

    Returns
    -------
    Note | None
        The note, or None if the token is malformed or the fret is
        above 24.

    Examples
    --------
    >>> parse_note_token("G12b")
    Note(string=2, fret=12, technique=<Technique.BEND: 'bend'>)
    >>> parse_note_token("x5") is None
    True
    """
    match = NOTE_TOKEN_RE.match(token)
    if match is None:
        return None

    letter, fret_text, symbol = match.groups()
    fret = int(fret_text)
    if fret > MAX_FRET:
        return None

    technique = Technique.from_symbol(symbol) if symbol else None
    return Note(string=STRING_INDEX[letter], fret=fret, technique=technique)


def parse_beat_line(line: str) -> Beat | None:
    """Parse a beat line like ``e0 B0 G2 : 4 | "Mir-"``.

    Parameters
    ----------
    line : str
        A stripped, non-empty line inside a measure.

    Returns
    -------
    Beat | None
        The beat, or None if the duration is not allowed or no token
        is a valid note.

    Examples
    --------
    >>> beat = parse_beat_line('e0 B1 : 4 | "la"')
    >>> [(n.string, n.fret) for n in beat.notes], beat.duration, beat.lyric
    ([(0, 0), (1, 1)], 4, 'la')
    >>> parse_beat_line("x1 y2 : 4") is None
    True
    """
    parts = [part.strip() for part in line.split("|")]
    main = parts[0]

    lyric = None
    if len(parts) > 1 and parts[1]:
        lyric_match = LYRIC_RE.search(parts[1])
        if lyric_match:
            lyric = lyric_match.group(1)

    notes_part, _, duration_part = (p.strip() for p in main.partition(":"))
    # Anything after a second colon is ignored
    duration_part = duration_part.split(":")[0].strip()
    if not notes_part:
        return None

    if duration_part:
        duration_match = LEADING_INT_RE.match(duration_part)
        duration = int(duration_match.group(0)) if duration_match else None
    else:
        duration = DEFAULT_SIF_DURATION
    if duration not in SIF_DURATIONS:
        logger.debug("Discarding beat line with bad duration: %r", line)
        return None

    notes: list[Note] = []
    for token in notes_part.split():
        note = parse_note_token(token)
        if note is None:
            logger.debug("Dropping malformed note token %r", token)
            continue
        notes.append(note)

    if not notes:
        logger.debug("Discarding beat line without valid notes: %r", line)
        return None

    return Beat(notes=tuple(notes), duration=duration, lyric=lyric)


def parse_measure_header(line: str) -> MeasureHeader:
    """Parse a ``MEASURE`` line.

    Examples
    --------
    >>> parse_measure_header("MEASURE 65 | Em | let ring")
    MeasureHeader(number=65, chord='Em', instruction='let ring')
    >>> parse_measure_header("measure")
    MeasureHeader(number=None, chord=None, instruction=None)
    """
    parts = [part.strip() for part in MEASURE_PREFIX_RE.sub("", line, count=1).split("|")]

    number = None
    number_match = LEADING_INT_RE.match(parts[0])
    if number_match:
        number = int(number_match.group(0)) or None

    chord = parts[1] if len(parts) > 1 and parts[1] else None
    instruction = parts[2] if len(parts) > 2 and parts[2] else None
    return MeasureHeader(number=number, chord=chord, instruction=instruction)


def apply_header_line(header: SifHeader, line: str) -> SifHeader:
    """Return ``header`` updated with one ``# Key: Value`` line.

    Unknown keys and unreadable values leave the header unchanged.

    Examples
    --------
    >>> apply_header_line(SifHeader(), "# Tempo: 96").tempo
    96
    >>> apply_header_line(SifHeader(), "# Tuning: E A D G B E").tuning
    ('E', 'A', 'D', 'G', 'B', 'E')
    """
    match = HEADER_RE.match(line)
    if match is None:
        return header

    key, value = match.group(1).lower(), match.group(2)

    if key == "section":
        return replace(header, section=value)
    if key == "tempo":
        tempo_match = LEADING_INT_RE.match(value)
        if tempo_match is None:
            logger.debug("Ignoring unreadable tempo %r", value)
            return header
        return replace(header, tempo=int(tempo_match.group(0)))
    if key == "time":
        return replace(header, time_signature=value)
    if key == "tuning":
        return replace(header, tuning=tuple(value.split()))
    if key == "instruction":
        return replace(header, instruction=value)
    return header


def _start_measure(header_line: str, metadata: SifHeader, produced: int) -> _MeasureDraft:
    header = parse_measure_header(header_line)
    first = produced == 0

    if header.instruction:
        instructions: tuple[str, ...] | None = (header.instruction,)
    elif first and metadata.instruction:
        instructions = (metadata.instruction,)
    else:
        instructions = None

    return _MeasureDraft(
        number=header.number or produced + 1,
        section=metadata.section if first else None,
        tempo=metadata.tempo if first else None,
        time_signature=metadata.time_signature if first else None,
        instructions=instructions,
        pending_chord=header.chord,
    )


def parse_sif(text: str) -> Tablature | None:
    """Parse a SIF document into a Tablature.

    This is the main entry point for SIF parsing. Malformed note tokens
    are dropped from their beat, beat lines without any valid note are
    dropped, and measures without beats are dropped.

    Parameters
    ----------
    text : str
        The raw SIF text.

    Returns
    -------
    Tablature | None
        The parsed tablature, or None if no measure has a beat.

    Examples
    --------
    >>> tab = parse_sif("MEASURE 1 | Em\\ne0 B0 : 4\\nB2")
    >>> [(b.chord, b.duration) for b in tab.measures[0].beats]
    [('Em', 4), (None, 8)]
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    metadata = SifHeader()
    measures: list[Measure] = []
    current: _MeasureDraft | None = None
    in_measures = False

    def close_current() -> None:
        if current is not None and current.beats:
            measures.append(current.build())

    for raw in text.split("\n"):
        line = raw.strip()
        if not line:
            continue

        if line.startswith("#") and not in_measures:
            metadata = apply_header_line(metadata, line)
            continue

        if line == HEADER_SEPARATOR:
            in_measures = True
            continue

        if line.upper().startswith("MEASURE"):
            in_measures = True
            close_current()
            current = _start_measure(line, metadata, len(measures))
            continue

        if current is None:
            logger.debug("Ignoring line outside any measure: %r", line)
            continue

        beat = parse_beat_line(line)
        if beat is not None:
            current.add_beat(beat)

    close_current()

    if not measures:
        logger.debug("SIF input contained no measures with beats")
        return None

    tuning = metadata.tuning
    if tuning is not None and len(tuning) != NUM_STRINGS:
        logger.debug("Ignoring tuning with %d names: %r", len(tuning), tuning)
        tuning = None

    return Tablature(measures=tuple(measures), tuning=tuning)
