"""Column-aware fret tokenizer for ASCII tab strings.

This module scans the content of one string within one measure and
returns every fret number with the column it starts at, which is what
lines notes up into beats.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tabconv.models import MAX_FRET, Technique

logger = logging.getLogger(__name__)

DIGITS = frozenset("0123456789")

# "s" is the common alternative spelling of a slide up
TECHNIQUE_ALIASES: dict[str, Technique] = {"s": Technique.SLIDE_UP}


@dataclass(frozen=True)
class FretToken:
    """A fret number found in a string line.

    Parameters
    ----------
    string : int
        String index the token was read from.
    fret : int
        Fret number (0-24).
    position : int
        Column of the first digit, relative to the measure slice.
    technique : Technique | None
        Technique marked directly after the fret, if any.
    """

    string: int
    fret: int
    position: int
    technique: Technique | None = None


def read_technique(char: str) -> Technique | None:
    """Map a character following a fret to a technique.

    Examples
    --------
    >>> read_technique("h")
    <Technique.HAMMER_ON: 'hammer-on'>
    >>> read_technique("s")
    <Technique.SLIDE_UP: 'slide-up'>
    >>> read_technique("-") is None
    True
    """
    if char in TECHNIQUE_ALIASES:
        return TECHNIQUE_ALIASES[char]
    return Technique.from_symbol(char)


def tokenize_string(content: str, string: int) -> list[FretToken]:
    """Scan one string's content for frets.

    A fret is a run of one or two digits; longer runs are split into
    two-digit chunks. A two-digit value above 24 is dropped.

    Parameters
    ----------
    content : str
        The measure slice for this string.
    string : int
        String index to record on each token.

    Returns
    -------
    list[FretToken]
        Tokens in left-to-right order.

    Examples
    --------
    >>> [(t.fret, t.position) for t in tokenize_string("--3--12h--", 0)]
    [(3, 2), (12, 5)]
    """
    tokens: list[FretToken] = []
    i = 0
    n = len(content)

    while i < n:
        if content[i] not in DIGITS:
            i += 1
            continue

        start = i
        i += 1
        if i < n and content[i] in DIGITS:
            i += 1

        fret = int(content[start:i])
        if fret > MAX_FRET:
            logger.debug("Dropping fret %d on string %d at column %d", fret, string, start)
            continue

        technique = read_technique(content[i]) if i < n else None
        tokens.append(FretToken(string=string, fret=fret, position=start, technique=technique))

    return tokens
