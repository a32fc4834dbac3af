"""Tests for the tablature data models."""

import json

import pytest

from tabconv.models import Beat, Measure, Note, Tablature, Technique


def make_tablature() -> Tablature:
    """Build a small tablature using every optional field."""
    return Tablature(
        measures=(
            Measure(
                beats=(
                    Beat(
                        notes=(Note(0, 0), Note(1, 3, Technique.SLIDE_DOWN)),
                        duration=4,
                        chord="Em",
                        lyric="Hey",
                    ),
                    Beat(notes=(), duration=8),
                ),
                number=3,
                section="Intro",
                tempo=90,
                time_signature="6/8",
                instructions=("let ring",),
            ),
            Measure(beats=(), number=7),
        ),
        tuning=("E", "B", "G", "D", "A", "D"),
    )


class TestTechnique:
    """Test technique symbols."""

    @pytest.mark.parametrize(
        ("symbol", "technique"),
        [
            ("h", Technique.HAMMER_ON),
            ("p", Technique.PULL_OFF),
            ("/", Technique.SLIDE_UP),
            ("\\", Technique.SLIDE_DOWN),
            ("b", Technique.BEND),
            ("~", Technique.VIBRATO),
            ("r", Technique.RELEASE),
        ],
    )
    def test_symbol_lookup(self, symbol: str, technique: Technique) -> None:
        """Test that every symbol maps to its technique and back."""
        assert Technique.from_symbol(symbol) is technique
        assert technique.symbol == symbol

    def test_unknown_symbol(self) -> None:
        """Test that non-technique characters give None."""
        assert Technique.from_symbol("-") is None
        assert Technique.from_symbol("s") is None


class TestInvariants:
    """Test model validation."""

    @pytest.mark.parametrize("fret", [-1, 25])
    def test_fret_out_of_range(self, fret: int) -> None:
        """Test that frets outside 0-24 are rejected."""
        with pytest.raises(ValueError):
            Note(string=0, fret=fret)

    @pytest.mark.parametrize("string", [-1, 6])
    def test_string_out_of_range(self, string: int) -> None:
        """Test that strings outside 0-5 are rejected."""
        with pytest.raises(ValueError):
            Note(string=string, fret=0)

    def test_fret_bounds_accepted(self) -> None:
        """Test that open and 24th fret are valid."""
        assert Note(string=5, fret=0).fret == 0
        assert Note(string=0, fret=24).fret == 24

    @pytest.mark.parametrize("duration", [0, 3, 64])
    def test_bad_duration(self, duration: int) -> None:
        """Test that unsupported durations are rejected."""
        with pytest.raises(ValueError):
            Beat(notes=(), duration=duration)

    def test_thirty_second_allowed(self) -> None:
        """Test that 32nd notes are part of the model."""
        assert Beat(notes=(), duration=32).duration == 32

    def test_measure_number_positive(self) -> None:
        """Test that measure numbers start at 1."""
        with pytest.raises(ValueError):
            Measure(beats=(), number=0)

    def test_tuning_length(self) -> None:
        """Test that tuning must have six names."""
        with pytest.raises(ValueError):
            Tablature(measures=(), tuning=("E", "A", "D", "G"))

    def test_duplicate_strings_preserved(self) -> None:
        """Test that two notes on one string are kept."""
        beat = Beat(notes=(Note(0, 1), Note(0, 3)), duration=8)
        assert len(beat.notes) == 2

    def test_rest(self) -> None:
        """Test rest detection."""
        assert Beat(notes=(), duration=4).is_rest
        assert not Beat(notes=(Note(0, 0),), duration=4).is_rest


class TestPayload:
    """Test the JSON payload form."""

    def test_round_trip(self) -> None:
        """Test that from_dict(to_dict()) restores the model."""
        tab = make_tablature()
        assert Tablature.from_dict(tab.to_dict()) == tab

    def test_round_trip_through_json(self) -> None:
        """Test that the payload survives JSON encoding."""
        tab = make_tablature()
        assert Tablature.from_dict(json.loads(json.dumps(tab.to_dict()))) == tab

    def test_payload_keys(self) -> None:
        """Test the stored key names and symbol encoding."""
        data = make_tablature().to_dict()
        measure = data["measures"][0]

        assert data["tuning"] == ["E", "B", "G", "D", "A", "D"]
        assert measure["timeSignature"] == "6/8"
        assert measure["instructions"] == ["let ring"]
        assert measure["beats"][0]["notes"][1] == {"string": 1, "fret": 3, "technique": "\\"}
        assert measure["beats"][0]["chord"] == "Em"

    def test_absent_fields_omitted(self) -> None:
        """Test that unset optional fields are left out."""
        data = make_tablature().to_dict()
        empty = data["measures"][1]

        assert empty == {"beats": [], "number": 7}
        assert "chord" not in data["measures"][0]["beats"][1]

    def test_no_tuning_omitted(self) -> None:
        """Test that a missing tuning is left out."""
        assert "tuning" not in Tablature(measures=()).to_dict()

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"measures": [{"number": 1}]},
            {"measures": [{"beats": [{"notes": [], "duration": 5}], "number": 1}]},
            {"measures": [{"beats": [{"notes": [{"string": 0, "fret": 30}], "duration": 4}], "number": 1}]},
            {"measures": [{"beats": [{"notes": [{"string": 0, "fret": "3"}], "duration": 4}], "number": 1}]},
            {"measures": [{"beats": [{"notes": [{"string": 0, "fret": 3, "technique": "x"}], "duration": 4}], "number": 1}]},
            {"measures": [], "tuning": ["E", "A"]},
            {"measures": [], "tuning": "EADGBE"},
            {"measures": [], "tuning": ["E", "B", "G", "D", "A", 2]},
            {"measures": [{"beats": [], "number": 1, "instructions": "let ring"}]},
            {"measures": [{"beats": [], "number": 1, "section": 3}]},
            {"measures": [{"beats": [], "number": 1, "timeSignature": [3, 4]}]},
            {"measures": [{"beats": [{"notes": [], "duration": 4, "chord": 5}], "number": 1}]},
            {"measures": [{"beats": [{"notes": [], "duration": 4, "lyric": False}], "number": 1}]},
            [],
        ],
    )
    def test_malformed_payload(self, payload: object) -> None:
        """Test that malformed payloads raise ValueError."""
        with pytest.raises(ValueError):
            Tablature.from_dict(payload)  # type: ignore[arg-type]
