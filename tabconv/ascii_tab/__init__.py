"""ASCII tablature reading and writing.

This module provides functionality to parse six-line ASCII guitar tab
into the shared tablature model and to render the model back to ASCII.
"""

from tabconv.ascii_tab.alignment import find_bar_columns, split_measures
from tabconv.ascii_tab.parser import parse_ascii_tab
from tabconv.ascii_tab.renderer import tablature_to_ascii
from tabconv.ascii_tab.tokenizer import FretToken, tokenize_string

__all__ = [
    "FretToken",
    "find_bar_columns",
    "parse_ascii_tab",
    "split_measures",
    "tablature_to_ascii",
    "tokenize_string",
]
