"""SIF (Songsterr Import Format) parsing.

This module provides functionality to parse hand-written SIF documents
into the shared tablature model.
"""

from tabconv.sif.example import SIF_EXAMPLE
from tabconv.sif.parser import (
    MeasureHeader,
    SifHeader,
    apply_header_line,
    parse_beat_line,
    parse_measure_header,
    parse_note_token,
    parse_sif,
)

__all__ = [
    "SIF_EXAMPLE",
    "MeasureHeader",
    "SifHeader",
    "apply_header_line",
    "parse_beat_line",
    "parse_measure_header",
    "parse_note_token",
    "parse_sif",
]
