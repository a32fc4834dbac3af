"""Tests for alphaTex generation."""

import pytest

from tabconv.alphatex import (
    ALPHATEX_EXAMPLE,
    AlphaTexOptions,
    beat_to_alphatex,
    measure_to_alphatex,
    note_to_alphatex,
    tablature_to_alphatex,
    technique_effect,
)
from tabconv.models import Beat, Measure, Note, Tablature, Technique
from tabconv.sif import parse_sif


def single_note_tablature(**measure_fields: object) -> Tablature:
    """Build a one-measure tablature with one eighth note on fret 5."""
    beat = Beat(notes=(Note(string=0, fret=5),), duration=8)
    return Tablature(measures=(Measure(beats=(beat,), number=1, **measure_fields),))  # type: ignore[arg-type]


def body(text: str) -> str:
    """Return the note body of a generated document."""
    return text.split("\n\n", 1)[1]


class TestTechniqueEffect:
    """Test technique to effect mapping."""

    @pytest.mark.parametrize(
        ("technique", "effect"),
        [
            (Technique.HAMMER_ON, "h"),
            (Technique.PULL_OFF, "p"),
            (Technique.SLIDE_UP, "s"),
            (Technique.SLIDE_DOWN, "s"),
            (Technique.VIBRATO, "v"),
            (Technique.BEND, "b (0 4)"),
            (Technique.RELEASE, None),
            (None, None),
        ],
    )
    def test_mapping(self, technique: Technique | None, effect: str | None) -> None:
        """Test every technique."""
        assert technique_effect(technique) == effect

    def test_every_technique_handled(self) -> None:
        """Test that no technique falls through to the error branch."""
        for technique in Technique:
            technique_effect(technique)


class TestNoteToAlphaTex:
    """Test note formatting."""

    def test_string_numbering(self) -> None:
        """Test that string 0 is alphaTex string 1 and string 5 is 6."""
        assert note_to_alphatex(Note(0, 3)) == "3.1"
        assert note_to_alphatex(Note(5, 0)) == "0.6"

    @pytest.mark.parametrize("technique", [Technique.SLIDE_UP, Technique.SLIDE_DOWN])
    def test_slides(self, technique: Technique) -> None:
        """Test that both slides are written as {s}."""
        assert note_to_alphatex(Note(2, 7, technique)) == "7.3 {s}"

    def test_release_dropped(self) -> None:
        """Test that release writes no effect."""
        assert note_to_alphatex(Note(1, 9, Technique.RELEASE)) == "9.2"


class TestBeatToAlphaTex:
    """Test beat formatting and duration tracking."""

    def test_same_duration_not_repeated(self) -> None:
        """Test that an unchanged duration is not written."""
        assert beat_to_alphatex(Beat(notes=(Note(0, 1),), duration=4), 4) == ("1.1", 4)

    def test_changed_duration_written(self) -> None:
        """Test that a new duration is written before the notes."""
        assert beat_to_alphatex(Beat(notes=(Note(0, 1),), duration=16), 4) == (":16 1.1", 16)

    def test_rest(self) -> None:
        """Test that a beat without notes is a rest."""
        assert beat_to_alphatex(Beat(notes=(), duration=4), 4) == ("r", 4)

    def test_chord_group(self) -> None:
        """Test that several notes are grouped in parentheses."""
        beat = Beat(notes=(Note(0, 0), Note(1, 2, Technique.HAMMER_ON)), duration=8)
        assert beat_to_alphatex(beat, 8) == ("(0.1 2.2 {h})", 8)


class TestMeasureToAlphaTex:
    """Test measure formatting."""

    def test_empty_measure(self) -> None:
        """Test that an empty measure is a whole rest."""
        assert measure_to_alphatex(Measure(beats=(), number=1), 8) == (":1 r", 1)

    def test_running_duration(self) -> None:
        """Test that the duration carries across beats."""
        beats = (
            Beat(notes=(Note(0, 1),), duration=8),
            Beat(notes=(Note(0, 2),), duration=8),
            Beat(notes=(Note(0, 3),), duration=2),
        )
        assert measure_to_alphatex(Measure(beats=beats, number=1), 4) == (":8 1.1 2.1 :2 3.1", 2)


class TestTablatureToAlphaTex:
    """Test full document generation."""

    def test_single_note_document(self) -> None:
        """Test the default header and a single eighth note."""
        text = tablature_to_alphatex(single_note_tablature())
        lines = text.split("\n")

        assert "\\tuning E4 B3 G3 D3 A2 E2" in lines
        assert lines == [
            "\\tempo 120",
            '\\track "Guitar"',
            "\\staff {tabs}",
            "\\tuning E4 B3 G3 D3 A2 E2",
            "\\ts 4 4",
            "",
            ":8 5.1",
        ]

    def test_title_and_artist(self) -> None:
        """Test optional metadata lines."""
        text = tablature_to_alphatex(single_note_tablature(), AlphaTexOptions(title="Wonderwall", artist="Oasis"))
        lines = text.split("\n")
        assert lines[0] == '\\title "Wonderwall"'
        assert lines[1] == '\\artist "Oasis"'

    def test_quotes_escaped(self) -> None:
        """Test that quotes in metadata are escaped."""
        text = tablature_to_alphatex(single_note_tablature(), AlphaTexOptions(title='Say "Hi"'))
        assert text.split("\n")[0] == '\\title "Say \\"Hi\\""'

    def test_tempo_precedence(self) -> None:
        """Test option tempo, then measure tempo, then the default."""
        tab = single_note_tablature(tempo=90)
        assert "\\tempo 140" in tablature_to_alphatex(tab, AlphaTexOptions(tempo=140))
        assert "\\tempo 90" in tablature_to_alphatex(tab)
        assert "\\tempo 120" in tablature_to_alphatex(single_note_tablature())

    def test_time_signature(self) -> None:
        """Test that N/D becomes two tokens."""
        assert "\\ts 6 8" in tablature_to_alphatex(single_note_tablature(time_signature="6/8")).split("\n")

    def test_custom_tuning(self) -> None:
        """Test that octaves are appended to six tuning names."""
        tab = Tablature(measures=single_note_tablature().measures, tuning=("D", "A", "F", "C", "G", "D"))
        assert "\\tuning D4 A3 F3 C3 G2 D2" in tablature_to_alphatex(tab).split("\n")

    def test_measures_joined_with_bars(self) -> None:
        """Test bar separators and the empty-measure reset."""
        tab = Tablature(
            measures=(
                Measure(beats=(Beat(notes=(Note(0, 1),), duration=4),), number=1),
                Measure(beats=(), number=2),
                Measure(beats=(Beat(notes=(Note(0, 2),), duration=1), Beat(notes=(), duration=4)), number=3),
            ),
        )
        assert body(tablature_to_alphatex(tab)) == "1.1 | :1 r | 2.1 :4 r"

    def test_no_measures(self) -> None:
        """Test an empty tablature."""
        text = tablature_to_alphatex(Tablature(measures=()))
        assert "\\tempo 120" in text
        assert text.endswith("\\ts 4 4\n\n")

    def test_from_sif(self) -> None:
        """Test generation from a parsed SIF document."""
        tab = parse_sif("# Tempo: 100\n# Time: 3/4\n---\nMEASURE 1 | Em\ne0 B0 G0 : 4\nB2 : 8\nMEASURE 2\nG7/ : 8\nG9b")
        assert tab is not None

        text = tablature_to_alphatex(tab)
        assert "\\tempo 100" in text
        assert "\\ts 3 4" in text
        assert body(text) == "(0.1 0.2 0.3) :8 2.2 | 7.3 {s} 9.3 {b (0 4)}"

    def test_example_document(self) -> None:
        """Test the built-in sample header."""
        assert ALPHATEX_EXAMPLE.startswith('\\title "Test Tab"')
        assert "\\staff {tabs}" in ALPHATEX_EXAMPLE
