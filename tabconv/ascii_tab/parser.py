"""ASCII tab parser.

This module provides the parse_ascii_tab() function that turns one or
more six-line ASCII tab blocks into a Tablature. ASCII tab carries no
rhythm, so every beat is read as an eighth note.

Supported input looks like::

    e|---0-----0---|
    B|---1-----1---|
    G|---0-----0---|
    D|---2---------|
    A|---3---------|
    E|-------------|
"""

from __future__ import annotations

import logging
import re
from itertools import groupby

from tabconv.ascii_tab.alignment import split_measures
from tabconv.ascii_tab.tokenizer import FretToken, tokenize_string
from tabconv.models import Beat, Measure, Note, Tablature

logger = logging.getLogger(__name__)

# String line pattern: a string letter directly followed by a bar
STRING_LINE_RE = re.compile(r"^([eBGDAE])\|(.*)$")

# Case matters: lowercase "e" is the high string, uppercase "E" the low one
STRING_INDEX: dict[str, int] = {"e": 0, "B": 1, "G": 2, "D": 3, "A": 4, "E": 5}

ASCII_DURATION = 8


def read_string_line(line: str) -> tuple[int, str] | None:
    """Read the string index and content of a tab line.

    Parameters
    ----------
    line : str
        A raw input line.

    Returns
    -------
    tuple[int, str] | None
        The string index and the text after the first bar, or None if
        the line is not a string line.

    Examples
    --------
    >>> read_string_line("e|--0--|")
    (0, '--0--|')
    >>> read_string_line("E|--3--|")
    (5, '--3--|')
    >>> read_string_line("Verse 1") is None
    True
    """
    match = STRING_LINE_RE.match(line.strip())
    if match is None:
        return None
    return STRING_INDEX[match.group(1)], match.group(2)


def group_sections(lines: list[tuple[int, str]]) -> list[list[tuple[int, str]]]:
    """Group string lines into tab blocks.

    A new block starts whenever a line's string index does not increase
    over the previous line. Each block is returned sorted by string.

    Examples
    --------
    >>> group_sections([(0, "a"), (1, "b"), (0, "c"), (1, "d")])
    [[(0, 'a'), (1, 'b')], [(0, 'c'), (1, 'd')]]
    """
    sections: list[list[tuple[int, str]]] = []
    current: list[tuple[int, str]] = []
    previous = -1

    for string, content in lines:
        if current and string <= previous:
            sections.append(current)
            current = []
        current.append((string, content))
        previous = string

    if current:
        sections.append(current)

    return [sorted(section, key=lambda line: line[0]) for section in sections]


def tokens_to_beats(tokens: list[FretToken]) -> list[Beat]:
    """Group fret tokens that share a column into beats.

    Parameters
    ----------
    tokens : list[FretToken]
        Tokens from every string of one measure.

    Returns
    -------
    list[Beat]
        Beats in column order; notes within a beat keep token order.
    """
    ordered = sorted(tokens, key=lambda t: t.position)
    beats: list[Beat] = []

    for _, column in groupby(ordered, key=lambda t: t.position):
        notes = tuple(Note(string=t.string, fret=t.fret, technique=t.technique) for t in column)
        beats.append(Beat(notes=notes, duration=ASCII_DURATION))

    return beats


def parse_section(section: list[tuple[int, str]]) -> list[list[Beat]]:
    """Parse one tab block into per-measure beat lists.

    Parameters
    ----------
    section : list[tuple[int, str]]
        String lines of the block, sorted by string index.

    Returns
    -------
    list[list[Beat]]
        Beats of each measure, empty measures included.
    """
    strings = [string for string, _ in section]
    contents = [content for _, content in section]
    measures: list[list[Beat]] = []

    for slices in split_measures(contents):
        tokens: list[FretToken] = []
        for string, content in zip(strings, slices):
            tokens.extend(tokenize_string(content, string))
        measures.append(tokens_to_beats(tokens))

    return measures


def parse_ascii_tab(text: str) -> Tablature | None:
    """Parse ASCII tablature into a Tablature.

    This is the main entry point for ASCII tab parsing. Lines that are
    not string lines are ignored, so blank lines and comments may sit
    between blocks. Measures are numbered from 1 across all blocks.

    Parameters
    ----------
    text : str
        The raw tab text.

    Returns
    -------
    Tablature | None
        The parsed tablature, or None if no string lines or no notes
        were found.

    Examples
    --------
    >>> tab = parse_ascii_tab("e|--0--3--|\\nB|--1-----|")
    >>> [[(n.string, n.fret) for n in b.notes] for b in tab.measures[0].beats]
    [[(0, 0), (1, 1)], [(0, 3)]]
    >>> parse_ascii_tab("no tab here") is None
    True
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    lines = [read for read in map(read_string_line, text.split("\n")) if read is not None]
    if not lines:
        logger.debug("No string lines found in ASCII tab input")
        return None

    sections = group_sections(lines)
    logger.debug("Found %d string lines in %d tab blocks", len(lines), len(sections))

    measures: list[Measure] = []
    for section in sections:
        for beats in parse_section(section):
            if not beats:
                continue
            measures.append(Measure(beats=tuple(beats), number=len(measures) + 1))

    if not measures:
        logger.debug("ASCII tab input contained no notes")
        return None

    return Tablature(measures=tuple(measures))
