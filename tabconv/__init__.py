"""Guitar tablature conversion library.

This library reads ASCII tab and SIF (Songsterr Import Format) into one
shared tablature model and writes that model out as ASCII tab or as
alphaTex for the alphaTab score renderer.

Examples
--------
>>> from tabconv import parse_sif, tablature_to_alphatex, tablature_to_ascii

>>> tab = parse_sif("MEASURE 1 | Em\\ne0 B0 G0 : 4\\nB2 : 8")
>>> print(tablature_to_ascii(tab))
e|0---|
B|0-2-|
G|0---|
D|----|
A|----|
E|----|

>>> tablature_to_alphatex(tab).splitlines()[-1]
'(0.1 0.2 0.3) :8 2.2'
"""

from tabconv.alphatex import AlphaTexOptions, tablature_to_alphatex
from tabconv.ascii_tab import parse_ascii_tab, tablature_to_ascii
from tabconv.chords import ChordChange, ChordSymbol, chord_changes, parse_chord_label
from tabconv.models import Beat, Measure, Note, Tablature, Technique
from tabconv.sif import SIF_EXAMPLE, parse_sif

__all__ = [
    "SIF_EXAMPLE",
    "AlphaTexOptions",
    "Beat",
    "ChordChange",
    "ChordSymbol",
    "Measure",
    "Note",
    "Tablature",
    "Technique",
    "chord_changes",
    "parse_ascii_tab",
    "parse_chord_label",
    "parse_sif",
    "tablature_to_alphatex",
    "tablature_to_ascii",
]
