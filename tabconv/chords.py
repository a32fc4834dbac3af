"""Chord label resolution for tablature beats.

Beat chord labels are free text. This module reads them with pychord and
spells them in Harte notation (e.g. "G:min7") so a song's chord changes
can be compared against a chord library.

Examples
--------
>>> parse_chord_label("Gm7").to_harte()
'G:min7'
>>> parse_chord_label("let ring") is None
True
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pychord import Chord as PyChord

from tabconv.models import Tablature

logger = logging.getLogger(__name__)

# Mapping from pychord quality names to Harte shorthand
PYCHORD_TO_HARTE_QUALITY: dict[str, str] = {
    "": "maj",
    "m": "min",
    "7": "7",
    "m7": "min7",
    "maj7": "maj7",
    "M7": "maj7",
    "mmaj7": "minmaj7",
    "mM7": "minmaj7",
    "dim": "dim",
    "dim7": "dim7",
    "aug": "aug",
    "m7-5": "hdim7",
    "m7b5": "hdim7",
    "sus2": "sus2",
    "sus4": "sus4",
    "7sus4": "7sus4",
    "add9": "maj(9)",
    "madd9": "min(9)",
    "6": "maj6",
    "m6": "min6",
    "9": "9",
    "m9": "min9",
    "maj9": "maj9",
    "11": "11",
    "13": "13",
    "5": "5",
}

HARTE_TO_PYCHORD_QUALITY: dict[str, str] = {}
for _pychord, _harte in PYCHORD_TO_HARTE_QUALITY.items():
    HARTE_TO_PYCHORD_QUALITY.setdefault(_harte, _pychord)


@dataclass(frozen=True)
class ChordSymbol:
    """A chord label resolved to root, quality and bass.

    Parameters
    ----------
    root : str
        Root note (e.g. "E", "F#", "Bb").
    quality : str
        Quality in Harte shorthand (e.g. "min", "7", "hdim7").
    bass : str | None
        Bass note of a slash chord.

    Examples
    --------
    >>> ChordSymbol(root="D", quality="maj", bass="F#").to_pychord()
    'D/F#'
    """

    root: str
    quality: str
    bass: str | None = None

    def to_harte(self) -> str:
        """Spell the chord in Harte notation."""
        result = f"{self.root}:{self.quality}"
        if self.bass:
            result = f"{result}/{self.bass}"
        return result

    def to_pychord(self) -> str:
        """Spell the chord the way pychord and most tab sites write it."""
        result = f"{self.root}{HARTE_TO_PYCHORD_QUALITY[self.quality]}"
        if self.bass:
            result = f"{result}/{self.bass}"
        return result

    def __str__(self) -> str:
        return self.to_harte()


@dataclass(frozen=True)
class ChordChange:
    """A chord label placed on a beat.

    Parameters
    ----------
    measure : int
        Number of the measure holding the beat.
    beat : int
        Index of the beat within its measure.
    label : str
        The label as written.
    chord : ChordSymbol | None
        The resolved chord, or None if the label is not a chord name.
    """

    measure: int
    beat: int
    label: str
    chord: ChordSymbol | None


def parse_chord_label(label: str) -> ChordSymbol | None:
    """Resolve a chord label.

    Parameters
    ----------
    label : str
        Chord text such as "Em", "B7" or "D/F#".

    Returns
    -------
    ChordSymbol | None
        The resolved chord, or None if pychord cannot read the label or
        its quality has no Harte spelling.
    """
    text = label.strip()
    if not text:
        return None

    try:
        pc = PyChord(text)
    except ValueError:
        logger.debug("Not a chord label: %r", label)
        return None

    quality = PYCHORD_TO_HARTE_QUALITY.get(str(pc.quality))
    if quality is None:
        logger.debug("No Harte spelling for chord quality %r", str(pc.quality))
        return None

    return ChordSymbol(root=pc.root, quality=quality, bass=pc.on or None)


def chord_changes(tablature: Tablature) -> tuple[ChordChange, ...]:
    """List every labelled beat of a tablature in playing order.

    Parameters
    ----------
    tablature : Tablature
        The tablature to scan.

    Returns
    -------
    tuple[ChordChange, ...]
        One entry per beat carrying a chord label.
    """
    changes: list[ChordChange] = []
    for measure in tablature.measures:
        for index, beat in enumerate(measure.beats):
            if beat.chord is None:
                continue
            changes.append(
                ChordChange(
                    measure=measure.number,
                    beat=index,
                    label=beat.chord,
                    chord=parse_chord_label(beat.chord),
                )
            )
    return tuple(changes)
