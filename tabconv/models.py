"""Canonical tablature data models.

This module defines the format-agnostic representation shared by every
parser and generator: notes, beats, measures and the tablature itself,
plus the JSON payload form used when a tablature is stored by the song
service.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

NUM_STRINGS = 6
MAX_FRET = 24

# Display names from highest-pitched (string 0) to lowest (string 5)
STRING_NAMES: tuple[str, ...] = ("e", "B", "G", "D", "A", "E")

ALLOWED_DURATIONS: frozenset[int] = frozenset({1, 2, 4, 8, 16, 32})


class Technique(Enum):
    """Articulation attached to a single note."""

    HAMMER_ON = "hammer-on"
    PULL_OFF = "pull-off"
    SLIDE_UP = "slide-up"
    SLIDE_DOWN = "slide-down"
    BEND = "bend"
    VIBRATO = "vibrato"
    RELEASE = "release"

    @property
    def symbol(self) -> str:
        """The character written after the fret number in tab text."""
        return _TECHNIQUE_SYMBOLS[self]

    @classmethod
    def from_symbol(cls, char: str) -> Technique | None:
        """Look up a technique by its tab symbol.

        Parameters
        ----------
        char : str
            A single tab character such as ``"h"`` or ``"/"``.

        Returns
        -------
        Technique | None
            The matching technique, or None if the character is not a
            technique symbol.

        Examples
        --------
        >>> Technique.from_symbol("/")
        <Technique.SLIDE_UP: 'slide-up'>
        >>> Technique.from_symbol("x") is None
        True
        """
        return _SYMBOL_TECHNIQUES.get(char)


_TECHNIQUE_SYMBOLS: dict[Technique, str] = {
    Technique.HAMMER_ON: "h",
    Technique.PULL_OFF: "p",
    Technique.SLIDE_UP: "/",
    Technique.SLIDE_DOWN: "\\",
    Technique.BEND: "b",
    Technique.VIBRATO: "~",
    Technique.RELEASE: "r",
}

_SYMBOL_TECHNIQUES: dict[str, Technique] = {v: k for k, v in _TECHNIQUE_SYMBOLS.items()}


@dataclass(frozen=True)
class Note:
    """A fretted (or open) note on one string.

    Parameters
    ----------
    string : int
        String index, 0 (highest-pitched) to 5 (lowest-pitched).
    fret : int
        Fret number, 0 (open) to 24.
    technique : Technique | None
        Articulation applied to this note.

    Examples
    --------
    >>> Note(string=0, fret=5)
    Note(string=0, fret=5, technique=None)
    """

    string: int
    fret: int
    technique: Technique | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.string < NUM_STRINGS:
            msg = f"String index out of range: {self.string}"
            raise ValueError(msg)
        if not 0 <= self.fret <= MAX_FRET:
            msg = f"Fret out of range: {self.fret}"
            raise ValueError(msg)


@dataclass(frozen=True)
class Beat:
    """A vertical slice of simultaneous notes sharing one duration.

    Parameters
    ----------
    notes : tuple[Note, ...]
        Notes sounding together. Empty means a rest. Two notes on the
        same string are kept as given.
    duration : int
        Note value: 1 (whole) through 32 (thirty-second).
    chord : str | None
        Free-text chord label shown above the beat.
    lyric : str | None
        Lyric syllable sung on this beat.
    """

    notes: tuple[Note, ...] = ()
    duration: int = 4
    chord: str | None = None
    lyric: str | None = None

    def __post_init__(self) -> None:
        if self.duration not in ALLOWED_DURATIONS:
            msg = f"Unsupported duration: {self.duration}"
            raise ValueError(msg)

    @property
    def is_rest(self) -> bool:
        """Whether the beat has no notes."""
        return not self.notes


@dataclass(frozen=True)
class Measure:
    """A bar of beats.

    Parameters
    ----------
    beats : tuple[Beat, ...]
        Beats in playing order.
    number : int
        Bar number as shown to the player (positive, gaps allowed).
    section : str | None
        Section label such as "Verse 1".
    tempo : int | None
        Tempo in beats per minute.
    time_signature : str | None
        Time signature written as "N/D".
    instructions : tuple[str, ...] | None
        Performance instructions such as "let ring".
    """

    beats: tuple[Beat, ...]
    number: int
    section: str | None = None
    tempo: int | None = None
    time_signature: str | None = None
    instructions: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if self.number < 1:
            msg = f"Measure number must be positive: {self.number}"
            raise ValueError(msg)


@dataclass(frozen=True)
class Tablature:
    """Complete tablature for one instrument part.

    Parameters
    ----------
    measures : tuple[Measure, ...]
        Measures in order.
    tuning : tuple[str, ...] | None
        Six open-string note names, highest string first, or None for
        the default tuning.
    """

    measures: tuple[Measure, ...]
    tuning: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if self.tuning is not None and len(self.tuning) != NUM_STRINGS:
            msg = f"Tuning needs exactly {NUM_STRINGS} names, got {len(self.tuning)}"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON-serializable payload form.

        Optional fields are left out when absent and techniques are
        written as their tab symbols.

        Returns
        -------
        dict[str, Any]
            Payload with ``measures`` and, when set, ``tuning``.

        Examples
        --------
        >>> tab = Tablature(measures=(Measure(beats=(Beat(notes=(Note(0, 3),)),), number=1),))
        >>> tab.to_dict()
        {'measures': [{'beats': [{'notes': [{'string': 0, 'fret': 3}], 'duration': 4}], 'number': 1}]}
        """
        result: dict[str, Any] = {
            "measures": [_measure_to_dict(m) for m in self.measures],
        }
        if self.tuning is not None:
            result["tuning"] = list(self.tuning)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Tablature:
        """Rebuild a tablature from its payload form.

        Parameters
        ----------
        data : dict[str, Any]
            A payload as produced by :meth:`to_dict`.

        Returns
        -------
        Tablature
            The reconstructed model.

        Raises
        ------
        ValueError
            If the payload is missing keys, has wrong types, or violates
            a model invariant.
        """
        try:
            measures = tuple(_measure_from_dict(m) for m in data["measures"])
            return cls(measures=measures, tuning=_optional_str_list(data.get("tuning"), "tuning"))
        except (KeyError, TypeError, AttributeError) as e:
            msg = f"Malformed tablature payload: {e!r}"
            raise ValueError(msg) from e


def _note_to_dict(note: Note) -> dict[str, Any]:
    result: dict[str, Any] = {"string": note.string, "fret": note.fret}
    if note.technique is not None:
        result["technique"] = note.technique.symbol
    return result


def _beat_to_dict(beat: Beat) -> dict[str, Any]:
    result: dict[str, Any] = {
        "notes": [_note_to_dict(n) for n in beat.notes],
        "duration": beat.duration,
    }
    if beat.chord is not None:
        result["chord"] = beat.chord
    if beat.lyric is not None:
        result["lyric"] = beat.lyric
    return result


def _measure_to_dict(measure: Measure) -> dict[str, Any]:
    result: dict[str, Any] = {
        "beats": [_beat_to_dict(b) for b in measure.beats],
        "number": measure.number,
    }
    if measure.section is not None:
        result["section"] = measure.section
    if measure.tempo is not None:
        result["tempo"] = measure.tempo
    if measure.time_signature is not None:
        result["timeSignature"] = measure.time_signature
    if measure.instructions is not None:
        result["instructions"] = list(measure.instructions)
    return result


def _require_int(value: Any, field: str) -> int:
    # bool is an int subclass but never a valid fret, string or duration
    if not isinstance(value, int) or isinstance(value, bool):
        msg = f"Expected integer for {field!r}, got {value!r}"
        raise ValueError(msg)
    return value


def _optional_str(value: Any, field: str) -> str | None:
    if value is not None and not isinstance(value, str):
        msg = f"Expected string for {field!r}, got {value!r}"
        raise ValueError(msg)
    return value


def _optional_str_list(value: Any, field: str) -> tuple[str, ...] | None:
    if value is None:
        return None
    # a bare string would otherwise split into characters
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        msg = f"Expected list of strings for {field!r}, got {value!r}"
        raise ValueError(msg)
    return tuple(value)


def _note_from_dict(data: dict[str, Any]) -> Note:
    symbol = data.get("technique")
    technique = None
    if symbol is not None:
        technique = Technique.from_symbol(symbol)
        if technique is None:
            msg = f"Unknown technique symbol: {symbol!r}"
            raise ValueError(msg)
    return Note(
        string=_require_int(data["string"], "string"),
        fret=_require_int(data["fret"], "fret"),
        technique=technique,
    )


def _beat_from_dict(data: dict[str, Any]) -> Beat:
    return Beat(
        notes=tuple(_note_from_dict(n) for n in data["notes"]),
        duration=_require_int(data["duration"], "duration"),
        chord=_optional_str(data.get("chord"), "chord"),
        lyric=_optional_str(data.get("lyric"), "lyric"),
    )


def _measure_from_dict(data: dict[str, Any]) -> Measure:
    tempo = data.get("tempo")
    return Measure(
        beats=tuple(_beat_from_dict(b) for b in data["beats"]),
        number=_require_int(data["number"], "number"),
        section=_optional_str(data.get("section"), "section"),
        tempo=_require_int(tempo, "tempo") if tempo is not None else None,
        time_signature=_optional_str(data.get("timeSignature"), "timeSignature"),
        instructions=_optional_str_list(data.get("instructions"), "instructions"),
    )
