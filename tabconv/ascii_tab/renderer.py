"""ASCII tab rendering.

This module turns a Tablature back into a six-line ASCII tab block for
display. Durations, chords and lyrics have no place in ASCII tab and are
dropped.
"""

from __future__ import annotations

from tabconv.models import NUM_STRINGS, STRING_NAMES, Beat, Tablature

FILL = "-"
BAR = "|"
MIN_CELL_WIDTH = 2


def beat_labels(beat: Beat) -> list[str]:
    """Compute the text shown on each string for one beat.

    Parameters
    ----------
    beat : Beat
        The beat to label.

    Returns
    -------
    list[str]
        One label per string: fret plus technique symbol, or an empty
        string for a silent string. A later note on the same string
        replaces an earlier one.

    Examples
    --------
    >>> from tabconv.models import Note, Technique
    >>> beat_labels(Beat(notes=(Note(0, 5, Technique.HAMMER_ON), Note(2, 7)), duration=8))
    ['5h', '', '7', '', '', '']
    """
    labels = [""] * NUM_STRINGS
    for note in beat.notes:
        label = str(note.fret)
        if note.technique is not None:
            label += note.technique.symbol
        labels[note.string] = label
    return labels


def tablature_to_ascii(tablature: Tablature) -> str:
    """Render a tablature as ASCII tab.

    Every beat takes a column as wide as its longest label (at least
    two characters) and each measure is closed by a bar on all strings,
    so the six lines always have equal length.

    Parameters
    ----------
    tablature : Tablature
        The tablature to render.

    Returns
    -------
    str
        Six newline-separated lines, high ``e`` first.

    Examples
    --------
    >>> from tabconv.models import Measure, Note
    >>> tab = Tablature(measures=(Measure(beats=(Beat(notes=(Note(0, 3),), duration=8),), number=1),))
    >>> print(tablature_to_ascii(tab))
    e|3-|
    B|--|
    G|--|
    D|--|
    A|--|
    E|--|
    """
    lines = [f"{name}{BAR}" for name in STRING_NAMES]

    for measure in tablature.measures:
        for beat in measure.beats:
            labels = beat_labels(beat)
            width = max(MIN_CELL_WIDTH, *(len(label) for label in labels))
            lines = [line + label.ljust(width, FILL) for line, label in zip(lines, labels)]
        lines = [line + BAR for line in lines]

    return "\n".join(lines)
