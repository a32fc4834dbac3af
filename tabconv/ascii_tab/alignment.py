"""Bar-line alignment for ASCII tab blocks.

ASCII tab encodes bar lines as ``|`` characters stacked vertically across
all strings. This module finds those columns and cuts a block of string
contents into per-measure slices.
"""

BAR = "|"


def find_bar_columns(contents: list[str]) -> list[int]:
    """Find columns where every line has a bar character.

    The scan is bounded by the shortest line so ragged input never
    indexes out of range.

    Parameters
    ----------
    contents : list[str]
        String contents of one tab block (text after each ``x|`` prefix).

    Returns
    -------
    list[int]
        Ascending column indices of vertically aligned bar lines.

    Examples
    --------
    >>> find_bar_columns(["--0--|--3--|", "--1--|-----|"])
    [5, 11]
    >>> find_bar_columns(["--0--|", "--1---"])
    []
    """
    if not contents:
        return []

    bound = min(len(c) for c in contents)
    return [i for i in range(bound) if all(c[i] == BAR for c in contents)]


def split_measures(contents: list[str]) -> list[list[str]]:
    """Split a tab block into measure slices at aligned bar columns.

    Each slice holds one string's content between two bar columns,
    excluding the bars themselves. With no aligned bar the whole block
    is a single measure.

    Parameters
    ----------
    contents : list[str]
        String contents of one tab block.

    Returns
    -------
    list[list[str]]
        One entry per measure, each with one slice per input line.

    Examples
    --------
    >>> split_measures(["-0-|-2-|", "-1-|-3-|"])
    [['-0-', '-1-'], ['-2-', '-3-'], ['', '']]
    >>> split_measures(["-0-", "-1-"])
    [['-0-', '-1-']]
    """
    bars = find_bar_columns(contents)
    if not bars:
        return [list(contents)]

    starts = [0] + [col + 1 for col in bars]
    ends: list[int | None] = [*bars, None]

    return [[c[start:end] for c in contents] for start, end in zip(starts, ends)]
